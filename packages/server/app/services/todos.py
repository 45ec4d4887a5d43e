"""
Todo service layer: todos, their assignments and comments.

Handles:
- Todo CRUD under a project
- Batch assignment insert/remove as single set statements
- Comment CRUD with author-only edits
"""

from __future__ import annotations

from typing import List

import structlog
from sqlalchemy import delete, insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.errors import AuthorizationError, ConflictError, NotFoundError
from app.models.assignments import Assignment
from app.models.comment import Comment
from app.models.todo import Todo
from taskhub_shared.schemas.todos import CommentWrite, TodoCreate, TodoUpdate

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Todos
# ---------------------------------------------------------------------------


async def get_todo_or_404(session: AsyncSession, todo_id: int) -> Todo:
    todo = await session.get(Todo, todo_id)
    if todo is None:
        raise NotFoundError("Todo not found")
    return todo


async def list_todos(session: AsyncSession, project_id: int) -> list[Todo]:
    result = await session.execute(
        select(Todo).where(Todo.project_id == project_id).order_by(Todo.id)
    )
    return list(result.scalars().all())


async def create_todo(
    session: AsyncSession,
    project_id: int,
    todo_in: TodoCreate,
    created_by: int,
) -> Todo:
    todo = Todo(
        title=todo_in.title,
        description=todo_in.description,
        status=todo_in.status.value,
        due_date=todo_in.due_date,
        project_id=project_id,
        created_by=created_by,
    )
    session.add(todo)
    await session.flush()
    log.info("todo.created", todo_id=todo.id, project_id=project_id)
    return todo


async def update_todo(session: AsyncSession, todo: Todo, todo_in: TodoUpdate) -> Todo:
    data = todo_in.model_dump(exclude_unset=True)
    # title and status are NOT NULL; an explicit null leaves them alone
    for key in ("title", "status"):
        if data.get(key, ...) is None:
            data.pop(key)
    if "status" in data:
        data["status"] = data["status"].value

    for key, value in data.items():
        setattr(todo, key, value)
    session.add(todo)
    await session.flush()
    await session.refresh(todo)
    log.info("todo.updated", todo_id=todo.id, fields=sorted(data))
    return todo


async def delete_todo(session: AsyncSession, todo_id: int) -> None:
    await session.execute(delete(Todo).where(Todo.id == todo_id))
    log.info("todo.deleted", todo_id=todo_id)


# ---------------------------------------------------------------------------
# Assignments
# ---------------------------------------------------------------------------


async def list_assignments(session: AsyncSession, todo_id: int) -> list[Assignment]:
    result = await session.execute(
        select(Assignment).where(Assignment.todo_id == todo_id).order_by(Assignment.user_id)
    )
    return list(result.scalars().all())


async def assign_users(session: AsyncSession, todo_id: int, user_ids: List[int]) -> None:
    """Insert every (user, todo) pair as one batch; any failure persists none."""
    unique_ids = list(dict.fromkeys(user_ids))
    if not unique_ids:
        return
    try:
        await session.execute(
            insert(Assignment),
            [{"user_id": uid, "todo_id": todo_id} for uid in unique_ids],
        )
    except IntegrityError:
        await session.rollback()
        log.info("todo.assign_conflict", todo_id=todo_id, user_ids=unique_ids)
        raise ConflictError("Assignments could not be created")
    log.info("todo.assigned", todo_id=todo_id, user_ids=unique_ids)


async def unassign_users(session: AsyncSession, todo_id: int, user_ids: List[int]) -> None:
    """Remove the listed users from the todo; ids not assigned are ignored."""
    if not user_ids:
        return
    await session.execute(
        delete(Assignment).where(
            Assignment.todo_id == todo_id,
            Assignment.user_id.in_(user_ids),
        )
    )
    log.info("todo.unassigned", todo_id=todo_id, user_ids=list(user_ids))


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


async def list_comments(session: AsyncSession, todo_id: int) -> list[Comment]:
    result = await session.execute(
        select(Comment).where(Comment.todo_id == todo_id).order_by(Comment.id)
    )
    return list(result.scalars().all())


async def create_comment(
    session: AsyncSession, todo_id: int, comment_in: CommentWrite, created_by: int
) -> Comment:
    comment = Comment(content=comment_in.content, todo_id=todo_id, created_by=created_by)
    session.add(comment)
    await session.flush()
    log.info("comment.created", comment_id=comment.id, todo_id=todo_id)
    return comment


async def get_own_comment(
    session: AsyncSession, comment_id: int, user_id: int, action: str
) -> Comment:
    """Load a comment the user authored; org role does not matter here."""
    comment = await session.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    if comment.created_by != user_id:
        raise AuthorizationError(f"You are not allowed to {action} this comment")
    return comment


async def update_comment(
    session: AsyncSession, comment: Comment, comment_in: CommentWrite
) -> Comment:
    comment.content = comment_in.content
    session.add(comment)
    await session.flush()
    await session.refresh(comment)
    log.info("comment.updated", comment_id=comment.id)
    return comment


async def delete_comment(session: AsyncSession, comment_id: int) -> None:
    await session.execute(delete(Comment).where(Comment.id == comment_id))
    log.info("comment.deleted", comment_id=comment_id)
