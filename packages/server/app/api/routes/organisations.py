"""
Organisation endpoints.

GET    /organisations                 — organisations the caller belongs to
POST   /organisations                 — create; the caller becomes ADMIN
GET    /organisations/{id}            — details (members only)
PATCH  /organisations/{id}            — rename (members only)
DELETE /organisations/{id}            — delete with all contents (ADMIN only)
GET    /organisations/{id}/projects   — list projects (members only)
POST   /organisations/{id}/projects   — create a project (members only)
GET    /organisations/{id}/members    — list memberships (members only)
POST   /organisations/{id}/members    — add a member (ADMIN only)
PUT    /organisations/{id}/members    — change a member's role (ADMIN only)
DELETE /organisations/{id}/members    — remove a member (ADMIN only)
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.routes.params import ResourceId
from app.core.auth import CurrentUser, require_user
from app.core.authz import is_admin, is_member
from app.core.database import get_session
from app.core.errors import AuthenticationError, AuthorizationError
from app.services import organizations as org_service
from app.services import projects as project_service
from taskhub_shared.schemas.common import MessageResponse
from taskhub_shared.schemas.organizations import (
    MemberRead,
    MemberRemove,
    MemberWrite,
    OrganisationRead,
    OrganisationWrite,
)
from taskhub_shared.schemas.projects import ProjectCreate, ProjectRead

router = APIRouter()

NOT_IN_ORGANISATION = "User is not in the organisation"
NOT_AN_ADMIN = "User is not an admin"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _ensure_member_read(session: AsyncSession, org_id: int, user_id: int) -> None:
    # Direct reads by outsiders are treated as unauthenticated
    if not await is_member(session, org_id, user_id):
        raise AuthenticationError(NOT_IN_ORGANISATION)


async def _ensure_member_write(session: AsyncSession, org_id: int, user_id: int) -> None:
    if not await is_member(session, org_id, user_id):
        raise AuthorizationError(NOT_IN_ORGANISATION)


async def _ensure_admin(session: AsyncSession, org_id: int, user_id: int) -> None:
    if not await is_admin(session, org_id, user_id):
        raise AuthorizationError(NOT_AN_ADMIN)


# ---------------------------------------------------------------------------
# Organisations
# ---------------------------------------------------------------------------

@router.get("", response_model=List[OrganisationRead])
async def list_organisations(
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    return await org_service.list_user_orgs(auth.user_id, session)


@router.post("", response_model=OrganisationRead, status_code=201)
async def create_organisation(
    body: OrganisationWrite,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    org = await org_service.create_org(body, auth.user_id, session)
    await session.commit()
    return org


@router.get("/{org_id}", response_model=List[OrganisationRead])
async def get_organisation(
    org_id: ResourceId,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    """Returned as a one-element list."""
    await _ensure_member_read(session, org_id, auth.user_id)
    org = await org_service.get_org(org_id, session)
    return [org] if org is not None else []


@router.patch("/{org_id}", response_model=OrganisationRead)
async def update_organisation(
    org_id: ResourceId,
    body: OrganisationWrite,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    await _ensure_member_write(session, org_id, auth.user_id)
    org = await org_service.update_org(org_id, body, session)
    await session.commit()
    return org


@router.delete("/{org_id}", response_model=MessageResponse)
async def delete_organisation(
    org_id: ResourceId,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    await _ensure_admin(session, org_id, auth.user_id)
    await org_service.delete_org(org_id, session)
    await session.commit()
    return MessageResponse(message="Organisation deleted")


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

@router.get("/{org_id}/projects", response_model=List[ProjectRead])
async def list_organisation_projects(
    org_id: ResourceId,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    await _ensure_member_read(session, org_id, auth.user_id)
    return await project_service.list_projects(session, org_id)


@router.post("/{org_id}/projects", response_model=ProjectRead, status_code=201)
async def create_organisation_project(
    org_id: ResourceId,
    body: ProjectCreate,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    await _ensure_member_write(session, org_id, auth.user_id)
    project = await project_service.create_project(session, org_id, body)
    await session.commit()
    return project


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------

@router.get("/{org_id}/members", response_model=List[MemberRead])
async def list_organisation_members(
    org_id: ResourceId,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    await _ensure_member_read(session, org_id, auth.user_id)
    return await org_service.list_members(org_id, session)


@router.post("/{org_id}/members", response_model=MessageResponse, status_code=201)
async def add_organisation_member(
    org_id: ResourceId,
    body: MemberWrite,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    await _ensure_admin(session, org_id, auth.user_id)
    await org_service.add_member(org_id, body, session)
    await session.commit()
    return MessageResponse(message="User added successfully")


@router.put("/{org_id}/members", response_model=MessageResponse)
async def update_organisation_member(
    org_id: ResourceId,
    body: MemberWrite,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    await _ensure_admin(session, org_id, auth.user_id)
    await org_service.update_member(org_id, body, session)
    await session.commit()
    return MessageResponse(message="User updated successfully")


@router.delete("/{org_id}/members", response_model=MessageResponse)
async def remove_organisation_member(
    org_id: ResourceId,
    body: MemberRemove,
    auth: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_session),
):
    await _ensure_admin(session, org_id, auth.user_id)
    await org_service.remove_member(org_id, body.user_id, session)
    await session.commit()
    return MessageResponse(message="User deleted successfully")
