"""
Per-request GraphQL context.

The context is built once per HTTP request by ``get_context`` and handed
to every resolver through ``info.context``.  It carries the authenticated
user (or ``None``) and a factory for short-lived database sessions.
"""
import logging
from contextlib import AbstractAsyncContextManager

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.concurrency import run_in_threadpool
from strawberry.fastapi import BaseContext

from blog_api.database import get_session_factory, session_scope
from blog_api.exceptions import AuthenticationError
from blog_api.graphql.access_control import decode_id
from blog_api.models import User
from blog_api.security import INVALID_TOKEN_MESSAGE, decode_token
from blog_api.services import user_service

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class RequestContext(BaseContext):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        user: User | None = None,
    ) -> None:
        super().__init__()
        self.session_factory = session_factory
        self.user = user

    def session(self) -> AbstractAsyncContextManager[AsyncSession]:
        """Open a session that commits on exit and rolls back on error.

        Each resolver opens its own, so concurrently resolved sibling
        fields never share one.
        """
        return session_scope(self.session_factory)


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an ``Authorization`` header, or ``""``."""
    if not authorization:
        return ""
    return authorization.removeprefix(BEARER_PREFIX).strip()


async def resolve_user(
    token: str,
    session_factory: async_sessionmaker[AsyncSession],
) -> User | None:
    """
    Resolve the user a bearer token was issued for.

    An empty token yields an anonymous context.  A token that fails
    verification, or whose subject no longer exists, raises
    ``AuthenticationError``: the request is rejected rather than
    downgraded to anonymous.
    """
    if not token:
        return None

    subject = await run_in_threadpool(decode_token, token)
    user_id = decode_id(subject)
    if user_id is None:
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)

    async with session_scope(session_factory) as db:
        user = await user_service.get_user(db, user_id)

    if user is None:
        logger.warning("Valid token for missing user id=%s", user_id)
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)
    return user


async def get_context(
    request: Request,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> RequestContext:
    """Context getter for the strawberry ``GraphQLRouter``."""
    token = extract_bearer_token(request.headers.get("authorization"))
    user = await resolve_user(token, session_factory)
    return RequestContext(session_factory, user=user)
