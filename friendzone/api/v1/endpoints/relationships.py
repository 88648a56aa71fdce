"""Relationship overview endpoint."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from friendzone.api.deps import get_caller_db, get_current_active_user
from friendzone.models.user import User
from friendzone.schemas.friendship import RelationshipOverview
from friendzone.services.relationship_service import relationship_service

router = APIRouter(
    prefix="/relationships",
    tags=["Relationships"],
)


@router.get(
    "",
    response_model=RelationshipOverview,
    status_code=status.HTTP_200_OK,
    summary="My friends, following and requests",
)
def get_relationships(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> RelationshipOverview:
    return relationship_service.build_overview(db, caller_id=current_user.id)
