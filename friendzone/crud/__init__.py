"""CRUD operations package - exports singleton instances for all models."""

from friendzone.core import policies  # noqa: F401  installs the row policy session listeners
from .base import CRUDBase
from .user import crud_user
from .profile import crud_profile
from .post import crud_post
from .comment import crud_comment
from .like import crud_like
from .follow import crud_follow
from .friendship import crud_friendship


__all__ = [
    # Base
    "CRUDBase",
    # CRUD instances
    "crud_user",
    "crud_profile",
    "crud_post",
    "crud_comment",
    "crud_like",
    "crud_follow",
    "crud_friendship",
]
