"""Project model."""

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import IntIdMixin, TimestampMixin


class Project(IntIdMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "projects"

    name: str = Field(nullable=False)
    description: Optional[str] = None
    organisation_id: int = Field(
        foreign_key="organisations.id", nullable=False, index=True, ondelete="CASCADE"
    )
