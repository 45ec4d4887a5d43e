"""User model."""

from sqlmodel import Field, SQLModel

from .base import IntIdMixin, TimestampMixin


class User(IntIdMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "users"

    name: str = Field(nullable=False)
    email: str = Field(unique=True, index=True, nullable=False)
    password_hash: str = Field(nullable=False)
