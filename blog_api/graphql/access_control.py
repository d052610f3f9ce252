"""
Authorization gate shared by the mutation resolvers.

``require_user`` must be the first call in every mutation other than
``signup`` and ``login``.  Ownership of posts and comments is enforced by
the service layer filtering writes on ``(id, user_id)``; a caller that
does not own the target simply affects nothing.
"""
import strawberry

from blog_api.exceptions import AuthorizationError
from blog_api.models import User

AUTH_REQUIRED_MESSAGE = "Please provide a JWT"

# Primary keys are 32-bit signed INTEGER columns.
MAX_ID = 2**31 - 1


def require_user(info: strawberry.Info) -> User:
    """Return the authenticated user or raise ``AuthorizationError``."""
    user = info.context.user
    if user is None:
        raise AuthorizationError(AUTH_REQUIRED_MESSAGE)
    return user


def decode_id(value: str | int | None) -> int | None:
    """
    Convert a GraphQL ``ID`` to a primary key.

    Returns None for anything that is not an integer in ``1..MAX_ID``,
    which callers treat as "no such record".  Out-of-range values never
    reach the database driver.
    """
    if value is None:
        return None
    try:
        pk = int(value)
    except (TypeError, ValueError):
        return None
    if not 1 <= pk <= MAX_ID:
        return None
    return pk
