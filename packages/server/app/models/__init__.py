# SQLModel definitions — imported here to ensure metadata is populated before create_all.
from .base import IntIdMixin, TimestampMixin  # noqa: F401
from .organization import Organisation  # noqa: F401
from .user import User  # noqa: F401
from .user_org import Membership  # noqa: F401
from .project import Project  # noqa: F401
from .todo import Todo  # noqa: F401
from .assignments import Assignment  # noqa: F401
from .comment import Comment  # noqa: F401
