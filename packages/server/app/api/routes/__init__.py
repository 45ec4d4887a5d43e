"""
API Router

Resources are mounted at the root: /auth, /users, /organisations,
/projects, /todos and /comments.
"""

from fastapi import APIRouter
from taskhub_shared.schemas.common import ErrorResponse
from . import auth, comments, organisations, projects, todos, users

# Every failure renders as {"error": "..."}
ERROR_RESPONSES = {status: {"model": ErrorResponse} for status in (400, 401, 403, 404)}

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["Auth"], responses=ERROR_RESPONSES)
router.include_router(users.router, prefix="/users", tags=["Users"], responses=ERROR_RESPONSES)
router.include_router(
    organisations.router, prefix="/organisations", tags=["Organisations"], responses=ERROR_RESPONSES
)
router.include_router(projects.router, prefix="/projects", tags=["Projects"], responses=ERROR_RESPONSES)
router.include_router(todos.router, prefix="/todos", tags=["Todos"], responses=ERROR_RESPONSES)
router.include_router(comments.router, prefix="/comments", tags=["Comments"], responses=ERROR_RESPONSES)
