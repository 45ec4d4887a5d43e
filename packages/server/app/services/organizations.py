"""
Organisation service — organisation CRUD and membership management.
"""

from __future__ import annotations

from typing import Optional

import structlog
from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.errors import ConflictError, NotFoundError
from app.models.organization import Organisation
from app.models.user import User
from app.models.user_org import Membership
from taskhub_shared.schemas.common import Role
from taskhub_shared.schemas.organizations import (
    MemberWrite,
    OrganisationWrite,
)

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Organisations
# ---------------------------------------------------------------------------

async def list_user_orgs(user_id: int, session: AsyncSession) -> list[Organisation]:
    """All organisations the user holds a membership in."""
    result = await session.execute(
        select(Organisation)
        .join(Membership, Membership.organisation_id == Organisation.id)
        .where(Membership.user_id == user_id)
        .order_by(Organisation.id)
    )
    return list(result.scalars().all())


async def get_org(org_id: int, session: AsyncSession) -> Optional[Organisation]:
    return await session.get(Organisation, org_id)


async def create_org(
    req: OrganisationWrite, creator_id: int, session: AsyncSession
) -> Organisation:
    """Create an organisation and make the creator its ADMIN.

    Both rows are flushed in the caller's transaction; if either insert fails
    the rollback discards both.
    """
    org = Organisation(name=req.name)
    session.add(org)
    await session.flush()

    session.add(
        Membership(user_id=creator_id, organisation_id=org.id, role=Role.ADMIN.value)
    )
    await session.flush()

    log.info("org.created", org_id=org.id, creator=creator_id)
    return org


async def update_org(
    org_id: int, req: OrganisationWrite, session: AsyncSession
) -> Organisation:
    org = await session.get(Organisation, org_id)
    if org is None:
        raise NotFoundError("Organisation not found")

    org.name = req.name
    session.add(org)
    await session.flush()
    await session.refresh(org)

    log.info("org.updated", org_id=org.id)
    return org


async def delete_org(org_id: int, session: AsyncSession) -> None:
    """Delete an organisation; the store cascades to members, projects and below."""
    await session.execute(delete(Organisation).where(Organisation.id == org_id))
    log.info("org.deleted", org_id=org_id)


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------

async def list_members(org_id: int, session: AsyncSession) -> list[Membership]:
    result = await session.execute(
        select(Membership)
        .where(Membership.organisation_id == org_id)
        .order_by(Membership.user_id)
    )
    return list(result.scalars().all())


async def add_member(org_id: int, req: MemberWrite, session: AsyncSession) -> Membership:
    if await session.get(User, req.user_id) is None:
        raise NotFoundError("User not found")

    existing = await session.execute(
        select(Membership).where(
            Membership.organisation_id == org_id,
            Membership.user_id == req.user_id,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("User is already a member of the organisation")

    membership = Membership(
        user_id=req.user_id, organisation_id=org_id, role=req.role.value
    )
    session.add(membership)
    try:
        await session.flush()
    except IntegrityError:
        await session.rollback()
        raise ConflictError("User is already a member of the organisation")

    log.info("org.member_added", org_id=org_id, user_id=req.user_id, role=req.role.value)
    return membership


async def update_member(org_id: int, req: MemberWrite, session: AsyncSession) -> None:
    result = await session.execute(
        update(Membership)
        .where(
            Membership.organisation_id == org_id,
            Membership.user_id == req.user_id,
        )
        .values(role=req.role.value)
    )
    if result.rowcount == 0:
        raise NotFoundError("Membership not found")

    log.info("org.member_updated", org_id=org_id, user_id=req.user_id, role=req.role.value)


async def remove_member(org_id: int, user_id: int, session: AsyncSession) -> None:
    await session.execute(
        delete(Membership).where(
            Membership.organisation_id == org_id,
            Membership.user_id == user_id,
        )
    )
    log.info("org.member_removed", org_id=org_id, user_id=user_id)
