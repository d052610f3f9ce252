"""
Password hashing and bearer-token primitives.

Both are synchronous and CPU-bound; async callers wrap them in
``run_in_threadpool`` so a bcrypt round does not stall the event loop.
"""
import logging
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt
from jwt.exceptions import InvalidTokenError

from blog_api.config import settings
from blog_api.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Please verify if your JWT is valid"

# bcrypt only reads the first 72 bytes of a password; newer releases raise
# instead of ignoring the rest, so both hashing and checking truncate.
BCRYPT_MAX_PASSWORD_BYTES = 72


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password using bcrypt with a fresh salt."""
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash.  A malformed hash never matches."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        return False


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

def issue_token(subject: str, expires_in: timedelta | None = None) -> str:
    """Sign *subject* into a JWT that expires after *expires_in* (24h default)."""
    now = datetime.now(UTC)
    if expires_in is None:
        expires_in = timedelta(hours=settings.JWT_EXPIRATION_HOURS)
    payload = {
        "sub": str(subject),
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> str:
    """
    Verify *token* and return its subject.

    Raises ``AuthenticationError`` on a bad signature, an expired token,
    malformed input, or a token without a ``sub`` claim.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except InvalidTokenError as exc:
        logger.warning("JWT verification failed: %s", exc)
        raise AuthenticationError(INVALID_TOKEN_MESSAGE) from exc

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)
    return subject
