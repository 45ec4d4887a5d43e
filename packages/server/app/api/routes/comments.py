"""
Comment endpoints. Only the author may change or remove a comment.

PATCH  /comments/{id} — replace the content
DELETE /comments/{id} — delete
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.routes.params import ResourceId
from app.core.auth import CurrentUser, require_user
from app.core.database import get_session
from app.services import todos as todo_service
from taskhub_shared.schemas.common import MessageResponse
from taskhub_shared.schemas.todos import CommentWrite

router = APIRouter()


@router.patch("/{comment_id}", response_model=MessageResponse)
async def update_comment(
    comment_id: ResourceId,
    body: CommentWrite,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    comment = await todo_service.get_own_comment(session, comment_id, auth.user_id, "update")
    await todo_service.update_comment(session, comment, body)
    await session.commit()
    return MessageResponse(message="Comment updated successfully")


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: ResourceId,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    comment = await todo_service.get_own_comment(session, comment_id, auth.user_id, "delete")
    await todo_service.delete_comment(session, comment.id)
    await session.commit()
    return MessageResponse(message="Comment deleted successfully")
