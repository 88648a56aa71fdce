"""Pydantic schemas for follows, friendships and the relationship overview."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict

from .profile import ProfileResponse


class FriendshipResponse(BaseModel):
    id: str
    user_id_1: str
    user_id_2: str
    status: str
    requested_by: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FriendRequestResponse(FriendshipResponse):
    """Incoming request with the requester's profile."""
    requester: ProfileResponse


class RelationshipOverview(BaseModel):
    """Friends, following and pending requests of the caller, freshly derived."""
    friend_ids: List[str]
    friends: List[ProfileResponse]
    following_ids: List[str]
    following: List[ProfileResponse]
    follower_count: int
    incoming_requests: List[FriendRequestResponse]
    outgoing_request_ids: List[str]
