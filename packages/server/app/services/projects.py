"""
Project service — project CRUD scoped to an organisation.
"""

from __future__ import annotations

import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.errors import NotFoundError
from app.models.project import Project
from taskhub_shared.schemas.projects import ProjectCreate, ProjectUpdate

log = structlog.get_logger()


async def get_project_or_404(session: AsyncSession, project_id: int) -> Project:
    project = await session.get(Project, project_id)
    if project is None:
        raise NotFoundError("Project not found")
    return project


async def list_projects(session: AsyncSession, org_id: int) -> list[Project]:
    result = await session.execute(
        select(Project).where(Project.organisation_id == org_id).order_by(Project.id)
    )
    return list(result.scalars().all())


async def create_project(
    session: AsyncSession, org_id: int, project_in: ProjectCreate
) -> Project:
    project = Project(
        name=project_in.name,
        description=project_in.description,
        organisation_id=org_id,
    )
    session.add(project)
    await session.flush()
    log.info("project.created", project_id=project.id, org_id=org_id)
    return project


async def update_project(
    session: AsyncSession, project: Project, project_in: ProjectUpdate
) -> Project:
    for key, value in project_in.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(project, key, value)
    session.add(project)
    await session.flush()
    await session.refresh(project)
    log.info("project.updated", project_id=project.id)
    return project


async def delete_project(session: AsyncSession, project_id: int) -> None:
    await session.execute(delete(Project).where(Project.id == project_id))
    log.info("project.deleted", project_id=project_id)
