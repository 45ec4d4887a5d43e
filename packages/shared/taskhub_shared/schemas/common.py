from enum import Enum
from pydantic import BaseModel

# Largest value an INTEGER id column holds
MAX_ID = 2**31 - 1


class Role(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class TodoStatus(str, Enum):
    TODO = "TODO"
    DOING = "DOING"
    DONE = "DONE"


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
