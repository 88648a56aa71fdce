"""CRUD operations for Comment."""

from typing import List

from sqlalchemy.orm import Session

from friendzone.crud.base import CRUDBase
from friendzone.models.comment import Comment


class CRUDComment(CRUDBase[Comment, dict, dict]):
    """CRUD operations for Comment."""
    
    def get_by_post(
        self,
        db: Session,
        *,
        post_id: str,
        skip: int = 0,
        limit: int = 100
    ) -> List[Comment]:
        """Comments of a post, oldest first."""
        return self.select(
            db,
            filters={"post_id": post_id},
            order_by="created_at",
            skip=skip,
            limit=limit,
        )
    
    def get_total_count(self, db: Session, *, post_id: str) -> int:
        return self.count(db, filters={"post_id": post_id})


# Singleton instance
crud_comment = CRUDComment(Comment)
