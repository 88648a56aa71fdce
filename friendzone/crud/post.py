"""CRUD operations for Post."""

from typing import List

from sqlalchemy.orm import Session

from friendzone.crud.base import CRUDBase
from friendzone.models.post import Post
from friendzone.schemas.post import PostCreate, PostUpdate


class CRUDPost(CRUDBase[Post, PostCreate, PostUpdate]):
    """CRUD operations for Post."""
    
    def feed(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 50,
    ) -> List[Post]:
        """All posts, most recent first."""
        return self.select(
            db,
            order_by="created_at",
            descending=True,
            skip=skip,
            limit=limit,
        )
    
    def get_by_author(
        self,
        db: Session,
        *,
        user_id: str,
        skip: int = 0,
        limit: int = 50,
    ) -> List[Post]:
        """Posts written by ``user_id``, most recent first."""
        return self.select(
            db,
            filters={"user_id": user_id},
            order_by="created_at",
            descending=True,
            skip=skip,
            limit=limit,
        )


# Singleton instance
crud_post = CRUDPost(Post)
