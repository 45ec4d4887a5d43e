from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime


class ProjectCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)


class ProjectRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    organisation_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
