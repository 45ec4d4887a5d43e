"""
Current-user endpoints.

GET    /users/me — profile of the authenticated user
DELETE /users/me — delete the authenticated user's account
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUser, require_user
from app.core.database import get_session
from app.services import users as user_service
from taskhub_shared.schemas.common import MessageResponse
from taskhub_shared.schemas.users import UserRead

router = APIRouter()


@router.get("/me", response_model=UserRead)
async def get_me(auth: CurrentUser = Depends(require_user)):
    return auth.user


@router.delete("/me", response_model=MessageResponse)
async def delete_me(
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    """Delete the account. Authored todos and comments stay, without an author."""
    await user_service.delete_user(auth.user_id, session)
    await session.commit()
    return MessageResponse(message="User deleted")
