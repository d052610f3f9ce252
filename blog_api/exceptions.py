"""
Client-facing error kinds.

Every error raised from a resolver that should reach the caller derives
from ``BlogAPIError``.  graphql-core copies the ``extensions`` attribute
of the original exception onto the formatted error, so each payload
carries a stable ``code`` next to its message.  Anything else raised
inside a resolver is masked by the schema (see ``blog_api.graphql.schema``).
"""


class BlogAPIError(Exception):
    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> dict:
        return {"code": self.code}


class ValidationError(BlogAPIError):
    """Input rejected, e.g. an email already registered at signup."""

    code = "BAD_USER_INPUT"


class AuthenticationError(BlogAPIError):
    """Bad credentials, or a bearer token that fails verification."""

    code = "UNAUTHENTICATED"


class AuthorizationError(BlogAPIError):
    """A mutation was attempted without an authenticated user."""

    code = "FORBIDDEN"
