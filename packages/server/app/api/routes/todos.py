"""
Todo endpoints, including assignments and comments.

GET    /todos/{id}              — todo details
PATCH  /todos/{id}              — update fields
DELETE /todos/{id}              — delete with assignments and comments
GET    /todos/{id}/assignments  — list assigned users
POST   /todos/{id}/assignments  — assign a batch of users (all or nothing)
DELETE /todos/{id}/assignments  — unassign a batch of users
GET    /todos/{id}/comments     — list comments
POST   /todos/{id}/comments     — add a comment

Every route requires membership in the organisation owning the todo.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.routes.params import ResourceId
from app.core.auth import CurrentUser, require_user
from app.core.authz import is_member_of_todo_org
from app.core.database import get_session
from app.core.errors import AuthorizationError
from app.models.todo import Todo
from app.services import todos as todo_service
from taskhub_shared.schemas.common import MessageResponse
from taskhub_shared.schemas.todos import (
    AssignmentBatch,
    AssignmentRead,
    CommentRead,
    CommentWrite,
    TodoRead,
    TodoUpdate,
)

router = APIRouter()


async def _load_todo(session: AsyncSession, todo_id: int, user_id: int) -> Todo:
    todo = await todo_service.get_todo_or_404(session, todo_id)
    if not await is_member_of_todo_org(session, todo.id, user_id):
        raise AuthorizationError("User is not in the organisation of the todo")
    return todo


# ---------------------------------------------------------------------------
# Todo
# ---------------------------------------------------------------------------

@router.get("/{todo_id}", response_model=TodoRead)
async def get_todo(
    todo_id: ResourceId,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    return await _load_todo(session, todo_id, auth.user_id)


@router.patch("/{todo_id}", response_model=TodoRead)
async def update_todo(
    todo_id: ResourceId,
    body: TodoUpdate,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    todo = await _load_todo(session, todo_id, auth.user_id)
    todo = await todo_service.update_todo(session, todo, body)
    await session.commit()
    return todo


@router.delete("/{todo_id}", response_model=MessageResponse)
async def delete_todo(
    todo_id: ResourceId,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    todo = await _load_todo(session, todo_id, auth.user_id)
    await todo_service.delete_todo(session, todo.id)
    await session.commit()
    return MessageResponse(message="Todo deleted")


# ---------------------------------------------------------------------------
# Assignments
# ---------------------------------------------------------------------------

@router.get("/{todo_id}/assignments", response_model=List[AssignmentRead])
async def list_todo_assignments(
    todo_id: ResourceId,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    todo = await _load_todo(session, todo_id, auth.user_id)
    return await todo_service.list_assignments(session, todo.id)


@router.post("/{todo_id}/assignments", response_model=MessageResponse, status_code=201)
async def create_todo_assignments(
    todo_id: ResourceId,
    body: AssignmentBatch,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    todo = await _load_todo(session, todo_id, auth.user_id)
    await todo_service.assign_users(session, todo.id, body.user_ids)
    await session.commit()
    return MessageResponse(message="Assignments created successfully")


@router.delete("/{todo_id}/assignments", response_model=MessageResponse)
async def delete_todo_assignments(
    todo_id: ResourceId,
    body: AssignmentBatch,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    todo = await _load_todo(session, todo_id, auth.user_id)
    await todo_service.unassign_users(session, todo.id, body.user_ids)
    await session.commit()
    return MessageResponse(message="Assignments deleted successfully")


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------

@router.get("/{todo_id}/comments", response_model=List[CommentRead])
async def list_todo_comments(
    todo_id: ResourceId,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    todo = await _load_todo(session, todo_id, auth.user_id)
    return await todo_service.list_comments(session, todo.id)


@router.post("/{todo_id}/comments", response_model=CommentRead, status_code=201)
async def create_todo_comment(
    todo_id: ResourceId,
    body: CommentWrite,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    todo = await _load_todo(session, todo_id, auth.user_id)
    comment = await todo_service.create_comment(session, todo.id, body, auth.user_id)
    await session.commit()
    return comment
