"""CRUD operations for Like."""

from typing import List, Optional

from sqlalchemy.orm import Session

from friendzone.crud.base import CRUDBase
from friendzone.models.like import Like


class CRUDLike(CRUDBase[Like, dict, dict]):
    """CRUD operations for Like."""
    
    def liker_ids(self, db: Session, *, post_id: str) -> List[str]:
        """Ids of everyone who liked the post."""
        return [like.user_id for like in self.select(db, filters={"post_id": post_id})]
    
    def count_for_post(self, db: Session, *, post_id: str) -> int:
        return self.count(db, filters={"post_id": post_id})
    
    def get_like(
        self,
        db: Session,
        *,
        post_id: str,
        user_id: str
    ) -> Optional[Like]:
        """Get like record if exists."""
        rows = self.select(db, filters={"post_id": post_id, "user_id": user_id}, limit=1)
        return rows[0] if rows else None


# Singleton instance
crud_like = CRUDLike(Like)
