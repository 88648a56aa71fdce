from .user import (
	UserRegister,
	TokenResponse,
)
from .profile import (
	ProfileBase,
	ProfileUpdate,
	ProfileResponse,
)
from .post import (
	PostCreate,
	PostUpdate,
	PostResponse,
	PostListResponse,
	LikeResponse,
	CommentCreate,
	CommentResponse,
	CommentListResponse,
)
from .friendship import (
	FriendshipResponse,
	FriendRequestResponse,
	RelationshipOverview,
)

__all__ = [
	# User
	"UserRegister",
	"TokenResponse",
	# Profile
	"ProfileBase",
	"ProfileUpdate",
	"ProfileResponse",
	# Post
	"PostCreate",
	"PostUpdate",
	"PostResponse",
	"PostListResponse",
	"LikeResponse",
	"CommentCreate",
	"CommentResponse",
	"CommentListResponse",
	# Friendship
	"FriendshipResponse",
	"FriendRequestResponse",
	"RelationshipOverview",
]
