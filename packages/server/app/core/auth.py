"""
Authentication for Taskhub.

Supports:
- Password hashing (bcrypt)
- Bearer JWT issuance and verification
- The authentication gate dependency used by every protected router
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
import structlog
from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_session
from app.core.errors import AuthenticationError
from app.models.user import User

log = structlog.get_logger()
settings = get_settings()

authorization_header = APIKeyHeader(name="Authorization", auto_error=False)

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

def hash_password(password: str) -> str:
    """Hash a password using bcrypt with the configured cost factor."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=settings.bcrypt_rounds)).decode()


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        # Corrupt stored hash or an over-long password
        return False


# ---------------------------------------------------------------------------
# JWT
# ---------------------------------------------------------------------------

def issue_token(user_id: int, *, expires_delta: timedelta | None = None) -> str:
    """Create a signed bearer token for a user."""
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": exp,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_jwt(token: str) -> dict:
    """Decode and verify a JWT. Raises jwt.PyJWTError on failure."""
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["sub", "iat", "exp"]},
    )


def verify_token(token: str) -> Optional[int]:
    """Return the user id a token was issued for, or None if it is not valid."""
    try:
        payload = decode_jwt(token)
        return int(payload["sub"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError) as exc:
        log.info("auth.token_rejected", reason=type(exc).__name__)
        return None


def parse_bearer(header: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme != "Bearer" or not token or " " in token:
        return None
    return token


# ---------------------------------------------------------------------------
# Authentication gate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CurrentUser:
    """Identity resolved by the gate and handed to each handler."""

    user_id: int
    user: User


async def require_user(
    authorization: Optional[str] = Depends(authorization_header),
    session: AsyncSession = Depends(get_session),
) -> CurrentUser:
    """Reject the request with 401 unless it carries a valid bearer token."""
    token = parse_bearer(authorization)
    if token is None:
        raise AuthenticationError()

    user_id = verify_token(token)
    if user_id is None:
        raise AuthenticationError()

    # Tokens outlive their users; a deleted account must not authenticate
    user = await session.get(User, user_id)
    if user is None:
        log.warning("auth.unknown_subject", user_id=user_id)
        raise AuthenticationError()

    structlog.contextvars.bind_contextvars(user_id=user_id)
    return CurrentUser(user_id=user_id, user=user)
