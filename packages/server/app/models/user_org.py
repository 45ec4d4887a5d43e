"""User-Organisation membership (join table)."""

from sqlmodel import Field, SQLModel


class Membership(SQLModel, table=True):
    __tablename__ = "user_organisation"

    user_id: int = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")
    organisation_id: int = Field(
        foreign_key="organisations.id", primary_key=True, index=True, ondelete="CASCADE"
    )
    role: str = Field(nullable=False, default="USER")  # ADMIN | USER
