"""
Authentication endpoints.

POST /auth/register — create an account and receive a bearer token
POST /auth/login    — exchange email/password for a bearer token
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import issue_token
from app.core.database import get_session
from app.services import users as user_service
from taskhub_shared.schemas.users import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserRead,
)

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    body: RegisterRequest,
    session: AsyncSession = Depends(get_session),
):
    """Register a new user with email/password."""
    user = await user_service.register_user(body, session)
    await session.commit()
    return RegisterResponse(user=UserRead.model_validate(user), token=issue_token(user.id))


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(get_session),
):
    """Authenticate with email/password and receive a bearer token."""
    user = await user_service.authenticate(body, session)
    return TokenResponse(token=issue_token(user.id))
