"""Friend request endpoints.

A request is a ``pending`` friendship row with the requester in
``user_id_1``. The target accepts it (``pending -> accepted``) or rejects it,
which deletes the row. Accepted friendships are permanent.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from friendzone.api.deps import get_caller_db, get_current_active_user
from friendzone.core.exceptions import ConflictException, NotFoundException
from friendzone.crud import crud_friendship, crud_profile
from friendzone.models.friendship import Friendship, FriendshipStatus
from friendzone.models.user import User
from friendzone.schemas.friendship import FriendshipResponse, RelationshipOverview
from friendzone.services.relationship_service import relationship_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/friendships",
    tags=["Friendships"],
)


def _get_friendship_or_404(db: Session, friendship_id: str) -> Friendship:
    friendship = crud_friendship.get(db, friendship_id)
    if not friendship:
        raise NotFoundException("Friendship not found")
    return friendship


@router.post(
    "/requests/{user_id}",
    response_model=RelationshipOverview,
    status_code=status.HTTP_201_CREATED,
    summary="Send friend request",
    description="""
    Send a friend request to another profile. Fails with 409 if any
    friendship row (pending or accepted) already links the two profiles.
    """,
)
def send_friend_request(
    user_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> RelationshipOverview:
    if not crud_profile.get(db, user_id):
        raise NotFoundException("Profile not found")
    if crud_friendship.between(db, user_a=current_user.id, user_b=user_id):
        raise ConflictException("A friendship or request already exists")

    friendship = crud_friendship.create(
        db,
        obj_in={
            "user_id_1": current_user.id,
            "user_id_2": user_id,
            "status": FriendshipStatus.PENDING.value,
            "requested_by": current_user.id,
        },
    )
    logger.info(f"Friend request sent: id={friendship.id}, from={current_user.id}, to={user_id}")
    return relationship_service.build_overview(db, caller_id=current_user.id)


@router.post(
    "/{friendship_id}/accept",
    response_model=RelationshipOverview,
    status_code=status.HTTP_200_OK,
    summary="Accept friend request",
)
def accept_friend_request(
    friendship_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> RelationshipOverview:
    friendship = _get_friendship_or_404(db, friendship_id)
    crud_friendship.update(
        db,
        db_obj=friendship,
        obj_in={"status": FriendshipStatus.ACCEPTED.value},
    )
    logger.info(f"Friend request accepted: id={friendship_id}, by={current_user.id}")
    return relationship_service.build_overview(db, caller_id=current_user.id)


@router.post(
    "/{friendship_id}/reject",
    response_model=RelationshipOverview,
    status_code=status.HTTP_200_OK,
    summary="Reject friend request",
    description="""
    Reject (or, as the requester, cancel) a pending request. The row is
    deleted so a new request can be sent later.
    """,
)
def reject_friend_request(
    friendship_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> RelationshipOverview:
    _get_friendship_or_404(db, friendship_id)
    crud_friendship.delete(db, id=friendship_id)
    logger.info(f"Friend request removed: id={friendship_id}, by={current_user.id}")
    return relationship_service.build_overview(db, caller_id=current_user.id)


@router.get(
    "/{friendship_id}",
    response_model=FriendshipResponse,
    status_code=status.HTTP_200_OK,
    summary="Get friendship",
)
def get_friendship(
    friendship_id: str,
    db: Session = Depends(get_caller_db),
) -> FriendshipResponse:
    friendship = _get_friendship_or_404(db, friendship_id)
    return FriendshipResponse.model_validate(friendship)
