"""Todo model."""

from datetime import datetime
from typing import Optional

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import IntIdMixin, TimestampMixin


class Todo(IntIdMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "todos"

    title: str = Field(nullable=False)
    description: Optional[str] = None
    project_id: int = Field(foreign_key="projects.id", nullable=False, index=True, ondelete="CASCADE")
    status: str = Field(nullable=False, default="TODO")  # TodoStatus value
    due_date: Optional[datetime] = Field(default=None, sa_type=sa.DateTime(timezone=True))
    # Authorship survives user deletion as NULL
    created_by: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")
