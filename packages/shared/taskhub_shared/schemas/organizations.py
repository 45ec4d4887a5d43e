"""
Organisation and membership schemas.

Covers: organisation create/update/read, membership add/update/remove/read.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .common import MAX_ID, Role


# ---------------------------------------------------------------------------
# Organisation
# ---------------------------------------------------------------------------

class OrganisationWrite(BaseModel):
    """Body for both POST /organisations and PATCH /organisations/{id}."""
    name: str = Field(min_length=1)


class OrganisationRead(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------

class MemberWrite(BaseModel):
    """Add a user to an organisation or change their role."""
    user_id: int = Field(gt=0, le=MAX_ID)
    role: Role


class MemberRemove(BaseModel):
    user_id: int = Field(gt=0, le=MAX_ID)


class MemberRead(BaseModel):
    user_id: int
    organisation_id: int
    role: Role

    model_config = {"from_attributes": True}
