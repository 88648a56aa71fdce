"""CRUD operations for Follow."""

from typing import List

from sqlalchemy.orm import Session

from friendzone.crud.base import CRUDBase
from friendzone.models.follow import Follow


class CRUDFollow(CRUDBase[Follow, dict, dict]):
    def following_ids(self, db: Session, *, follower_id: str) -> List[str]:
        """Ids of the profiles ``follower_id`` follows."""
        rows = self.select(db, filters={"follower_id": follower_id}, order_by="created_at")
        return [row.following_id for row in rows]

    def follower_count(self, db: Session, *, user_id: str) -> int:
        return self.count(db, filters={"following_id": user_id})


crud_follow = CRUDFollow(Follow)
