"""CRUD operations for `Profile` model."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from friendzone.crud.base import CRUDBase
from friendzone.models.profile import Profile
from friendzone.schemas.profile import ProfileBase, ProfileUpdate


class CRUDProfile(CRUDBase[Profile, ProfileBase, ProfileUpdate]):
    def get_by_username(self, db: Session, username: str) -> Optional[Profile]:
        stmt = select(Profile).where(Profile.username == username).limit(1)
        return db.scalars(stmt).first()

    def get_many(self, db: Session, ids: List[str]) -> List[Profile]:
        """Profiles for ``ids``, in no particular order."""
        if not ids:
            return []
        return self.select(db, filters={"id": ids})

    def discover(self, db: Session, *, exclude_id: str, limit: int = 20) -> List[Profile]:
        """Everyone except ``exclude_id``, newest accounts first."""
        return self.select(
            db,
            exclude={"id": exclude_id},
            order_by="created_at",
            descending=True,
            limit=limit,
        )


crud_profile = CRUDProfile(Profile)
