"""Profile endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from friendzone.api.deps import get_caller_db, get_current_active_user
from friendzone.config import settings
from friendzone.core.exceptions import NotFoundException
from friendzone.crud import crud_profile
from friendzone.models.user import User
from friendzone.schemas.profile import ProfileResponse, ProfileUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/profiles",
    tags=["Profiles"],
)


@router.get(
    "/me",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get my profile",
)
def get_my_profile(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> ProfileResponse:
    profile = crud_profile.get(db, current_user.id)
    if not profile:
        raise NotFoundException("Profile not found")
    return ProfileResponse.model_validate(profile)


@router.put(
    "/me",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Update my profile",
)
def update_my_profile(
    profile_in: ProfileUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> ProfileResponse:
    """Update username, full name, bio or avatar of the caller's profile."""
    profile = crud_profile.update_by_id(db, id=current_user.id, obj_in=profile_in)
    if not profile:
        raise NotFoundException("Profile not found")
    logger.info(f"Profile updated: id={profile.id}")
    return ProfileResponse.model_validate(profile)


@router.delete(
    "/me",
    status_code=status.HTTP_200_OK,
    summary="Delete my profile",
    description="""
    Delete the caller's profile together with every post, comment, like,
    follow and friendship that references it.
    """,
)
def delete_my_profile(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> dict:
    deleted = crud_profile.delete(db, id=current_user.id)
    if not deleted:
        raise NotFoundException("Profile not found")
    logger.info(f"Profile deleted: id={current_user.id}")
    return {"message": "Profile deleted."}


@router.get(
    "/discover",
    response_model=List[ProfileResponse],
    status_code=status.HTTP_200_OK,
    summary="Discover people",
)
def discover_profiles(
    limit: int = Query(settings.DISCOVER_LIMIT, ge=1, le=100),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> List[ProfileResponse]:
    """Everyone except the caller, newest accounts first."""
    profiles = crud_profile.discover(db, exclude_id=current_user.id, limit=limit)
    return [ProfileResponse.model_validate(p) for p in profiles]


@router.get(
    "/by-username/{username}",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get profile by username",
)
def get_profile_by_username(
    username: str,
    db: Session = Depends(get_caller_db),
) -> ProfileResponse:
    profile = crud_profile.get_by_username(db, username)
    if not profile:
        raise NotFoundException("Profile not found")
    return ProfileResponse.model_validate(profile)


@router.get(
    "/{profile_id}",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get profile",
)
def get_profile(
    profile_id: str,
    db: Session = Depends(get_caller_db),
) -> ProfileResponse:
    profile = crud_profile.get(db, profile_id)
    if not profile:
        raise NotFoundException("Profile not found")
    return ProfileResponse.model_validate(profile)
