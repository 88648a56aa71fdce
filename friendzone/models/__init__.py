"""
SQLAlchemy Models for Hyper Friends Zone
"""

from ..database import Base
from .user import User
from .profile import Profile
from .post import Post
from .comment import Comment
from .like import Like
from .follow import Follow
from .friendship import Friendship, FriendshipStatus

# Export all models
__all__ = [
    "Base",
    "User",
    "Profile",
    "Post",
    "Comment",
    "Like",
    "Follow",
    "Friendship",
    "FriendshipStatus",
]
