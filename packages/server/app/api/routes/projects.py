"""
Project endpoints.

GET    /projects/{id}        — project details (org members)
PATCH  /projects/{id}        — update name/description (org members)
DELETE /projects/{id}        — delete with its todos (org ADMIN)
GET    /projects/{id}/todos  — list todos (org members)
POST   /projects/{id}/todos  — create a todo (org members)
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.routes.params import ResourceId
from app.core.auth import CurrentUser, require_user
from app.core.authz import is_admin, is_member_of_project_org
from app.core.database import get_session
from app.core.errors import AuthorizationError
from app.models.project import Project
from app.services import projects as project_service
from app.services import todos as todo_service
from taskhub_shared.schemas.common import MessageResponse
from taskhub_shared.schemas.projects import ProjectRead, ProjectUpdate
from taskhub_shared.schemas.todos import TodoCreate, TodoRead

router = APIRouter()

NOT_IN_PROJECT_ORGANISATION = "User is not in the organisation of the project"


async def _load_project(session: AsyncSession, project_id: int, user_id: int) -> Project:
    project = await project_service.get_project_or_404(session, project_id)
    if not await is_member_of_project_org(session, project.id, user_id):
        raise AuthorizationError(NOT_IN_PROJECT_ORGANISATION)
    return project


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: ResourceId,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    return await _load_project(session, project_id, auth.user_id)


@router.patch("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: ResourceId,
    body: ProjectUpdate,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    project = await _load_project(session, project_id, auth.user_id)
    project = await project_service.update_project(session, project, body)
    await session.commit()
    return project


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: ResourceId,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    project = await project_service.get_project_or_404(session, project_id)
    if not await is_admin(session, project.organisation_id, auth.user_id):
        raise AuthorizationError("User is not an admin")
    await project_service.delete_project(session, project.id)
    await session.commit()
    return MessageResponse(message="Project deleted")


# ---------------------------------------------------------------------------
# Todos under a project
# ---------------------------------------------------------------------------

@router.get("/{project_id}/todos", response_model=List[TodoRead])
async def list_project_todos(
    project_id: ResourceId,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    if not await is_member_of_project_org(session, project_id, auth.user_id):
        raise AuthorizationError(NOT_IN_PROJECT_ORGANISATION)
    return await todo_service.list_todos(session, project_id)


@router.post("/{project_id}/todos", response_model=List[TodoRead], status_code=201)
async def create_project_todo(
    project_id: ResourceId,
    body: TodoCreate,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    """Returned as a one-element list."""
    # A missing project reads as "not a member" here, never as 404
    if not await is_member_of_project_org(session, project_id, auth.user_id):
        raise AuthorizationError(NOT_IN_PROJECT_ORGANISATION)
    todo = await todo_service.create_todo(session, project_id, body, auth.user_id)
    await session.commit()
    return [todo]
