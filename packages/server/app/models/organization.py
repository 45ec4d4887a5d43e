"""Organisation model."""

from sqlmodel import Field, SQLModel

from .base import IntIdMixin, TimestampMixin


class Organisation(IntIdMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "organisations"

    name: str = Field(nullable=False)
