"""Follow / unfollow endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from friendzone.api.deps import get_caller_db, get_current_active_user
from friendzone.core.exceptions import ConflictException, NotFoundException
from friendzone.crud import crud_follow, crud_profile
from friendzone.models.user import User
from friendzone.schemas.friendship import RelationshipOverview
from friendzone.services.relationship_service import relationship_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/follows",
    tags=["Follows"],
)


@router.post(
    "/{user_id}",
    response_model=RelationshipOverview,
    status_code=status.HTTP_201_CREATED,
    summary="Follow a profile",
    description="""
    Follow another profile. Returns the caller's refreshed relationship lists.
    """,
)
def follow(
    user_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> RelationshipOverview:
    if not crud_profile.get(db, user_id):
        raise NotFoundException("Profile not found")
    if user_id in crud_follow.following_ids(db, follower_id=current_user.id):
        raise ConflictException("Already following this profile")

    crud_follow.create(db, obj_in={"follower_id": current_user.id, "following_id": user_id})
    logger.info(f"Follow created: follower={current_user.id}, following={user_id}")
    return relationship_service.build_overview(db, caller_id=current_user.id)


@router.delete(
    "/{user_id}",
    response_model=RelationshipOverview,
    status_code=status.HTTP_200_OK,
    summary="Unfollow a profile",
)
def unfollow(
    user_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> RelationshipOverview:
    removed = crud_follow.delete_where(
        db, filters={"follower_id": current_user.id, "following_id": user_id}
    )
    if not removed:
        raise NotFoundException("Not following this profile")
    logger.info(f"Follow removed: follower={current_user.id}, following={user_id}")
    return relationship_service.build_overview(db, caller_id=current_user.id)
