"""Todo, assignment and comment schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, conint

from .common import MAX_ID, TodoStatus

# Assignment ids must be real JSON integers: "3", 3.0 and true are rejected.
AssignmentUserId = conint(strict=True, gt=0, le=MAX_ID)


# ---------------------------------------------------------------------------
# Todo CRUD
# ---------------------------------------------------------------------------

class TodoCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str
    status: TodoStatus = TodoStatus.TODO
    due_date: Optional[datetime] = None


class TodoUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[TodoStatus] = None
    due_date: Optional[datetime] = None


class TodoRead(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    project_id: int
    status: TodoStatus
    due_date: Optional[datetime] = None
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Assignments
# ---------------------------------------------------------------------------

class AssignmentBatch(BaseModel):
    """Request body for POST and DELETE /todos/{todoId}/assignments."""
    user_ids: List[AssignmentUserId]


class AssignmentRead(BaseModel):
    user_id: int
    todo_id: int

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------

class CommentWrite(BaseModel):
    content: str = Field(min_length=1)


class CommentRead(BaseModel):
    id: int
    content: str
    todo_id: int
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
