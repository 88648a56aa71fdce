"""Pydantic schemas for Post, Comment and Like."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .profile import ProfileResponse, reject_null, validate_optional_url


def _non_blank(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Content must not be empty")
    return v


class PostCreate(BaseModel):
    """Schema for creating a new post."""
    content: str = Field(..., max_length=5000, description="Post content")
    image_url: str = Field("", description="Optional image URL")

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str) -> str:
        return _non_blank(v)

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str) -> str:
        return validate_optional_url(v)


class PostUpdate(BaseModel):
    """Schema for updating a post."""
    content: Optional[str] = Field(None, max_length=5000)
    image_url: Optional[str] = None

    @field_validator("content", "image_url", mode="before")
    @classmethod
    def check_not_null(cls, v):
        return reject_null(v)

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str) -> str:
        return _non_blank(v)

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str) -> str:
        return validate_optional_url(v)


class PostResponse(BaseModel):
    """Schema for Post response."""
    id: str
    user_id: str
    content: str
    image_url: str
    author: Optional[ProfileResponse] = None  # Populated from the author profile
    like_count: int = 0
    comment_count: int = 0
    is_liked: bool = False  # Populated for the current caller
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostListResponse(BaseModel):
    """Response for the feed."""
    posts: List[PostResponse]
    total: int
    has_more: bool = Field(..., description="Whether there are more posts to load")


class LikeResponse(BaseModel):
    """Response for like / unlike."""
    post_id: str
    is_liked: bool
    like_count: int


class CommentCreate(BaseModel):
    """Schema for creating a comment."""
    content: str = Field(..., max_length=2000, description="Comment content")

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str) -> str:
        return _non_blank(v)


class CommentResponse(BaseModel):
    """Schema for Comment response."""
    id: str
    post_id: str
    user_id: str
    content: str
    author: Optional[ProfileResponse] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentListResponse(BaseModel):
    """Response for listing comments."""
    comments: List[CommentResponse]
    total: int
