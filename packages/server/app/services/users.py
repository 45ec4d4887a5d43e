"""
User service — registration, credential checks and account removal.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

import structlog
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select
from starlette.concurrency import run_in_threadpool

from app.core.auth import hash_password, verify_password
from app.core.errors import AuthenticationError, ConflictError
from app.models.user import User
from taskhub_shared.schemas.users import LoginRequest, RegisterRequest

log = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid credentials"


@lru_cache
def _dummy_hash() -> str:
    return hash_password("taskhub-no-such-user")


def _verify_against_dummy(password: str) -> bool:
    # Unknown emails still pay for one bcrypt check
    return verify_password(password, _dummy_hash())


async def get_user_by_email(email: str, session: AsyncSession) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def register_user(req: RegisterRequest, session: AsyncSession) -> User:
    """Insert a new user. Duplicate emails are rejected by the unique index."""
    password_hash = await run_in_threadpool(hash_password, req.password)
    user = User(email=str(req.email), name=req.name, password_hash=password_hash)
    session.add(user)
    try:
        await session.flush()
    except IntegrityError:
        await session.rollback()
        log.info("user.register_conflict", email=str(req.email))
        raise ConflictError("Email already registered")

    log.info("user.registered", user_id=user.id)
    return user


async def authenticate(req: LoginRequest, session: AsyncSession) -> User:
    """Return the user for a correct email/password pair.

    Unknown email and wrong password raise the same error so callers cannot
    tell which one failed.
    """
    user = await get_user_by_email(str(req.email), session)
    if user is None:
        await run_in_threadpool(_verify_against_dummy, req.password)
        log.warning("auth.login_failure", reason="unknown_email")
        raise AuthenticationError(INVALID_CREDENTIALS)

    if not await run_in_threadpool(verify_password, req.password, user.password_hash):
        log.warning("auth.login_failure", user_id=user.id, reason="bad_password")
        raise AuthenticationError(INVALID_CREDENTIALS)

    log.info("auth.login_success", user_id=user.id)
    return user


async def delete_user(user_id: int, session: AsyncSession) -> None:
    """Remove a user; memberships and assignments go with it, authored rows keep a NULL author."""
    await session.execute(delete(User).where(User.id == user_id))
    log.info("user.deleted", user_id=user_id)
