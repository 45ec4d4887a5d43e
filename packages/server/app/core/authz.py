"""
Authorization predicates.

Every check is a fresh read against the store so that a revoked
membership takes effect on the very next request.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models.project import Project
from app.models.todo import Todo
from app.models.user_org import Membership
from taskhub_shared.schemas.common import Role


async def _membership(
    session: AsyncSession, org_id: int, user_id: int
) -> Membership | None:
    result = await session.execute(
        select(Membership).where(
            Membership.organisation_id == org_id,
            Membership.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def is_member(session: AsyncSession, org_id: int, user_id: int) -> bool:
    return await _membership(session, org_id, user_id) is not None


async def is_admin(session: AsyncSession, org_id: int, user_id: int) -> bool:
    membership = await _membership(session, org_id, user_id)
    return membership is not None and membership.role == Role.ADMIN.value


async def is_member_of_project_org(
    session: AsyncSession, project_id: int, user_id: int
) -> bool:
    """Membership in the organisation owning the project; False if no such project."""
    result = await session.execute(
        select(Project.organisation_id).where(Project.id == project_id)
    )
    org_id = result.scalar_one_or_none()
    if org_id is None:
        return False
    return await is_member(session, org_id, user_id)


async def is_member_of_todo_org(
    session: AsyncSession, todo_id: int, user_id: int
) -> bool:
    result = await session.execute(select(Todo.project_id).where(Todo.id == todo_id))
    project_id = result.scalar_one_or_none()
    if project_id is None:
        return False
    return await is_member_of_project_org(session, project_id, user_id)
