"""Comment model."""

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import IntIdMixin, TimestampMixin


class Comment(IntIdMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "comments"

    content: str = Field(nullable=False)
    todo_id: int = Field(foreign_key="todos.id", nullable=False, index=True, ondelete="CASCADE")
    created_by: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")
