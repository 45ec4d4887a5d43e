"""Todo assignment join table."""

from sqlmodel import Field, SQLModel


class Assignment(SQLModel, table=True):
    __tablename__ = "todo_assignment"

    user_id: int = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")
    todo_id: int = Field(foreign_key="todos.id", primary_key=True, index=True, ondelete="CASCADE")
