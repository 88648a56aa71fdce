"""CRUD operations for Friendship."""

from typing import List, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from friendzone.crud.base import CRUDBase
from friendzone.models.friendship import Friendship, FriendshipStatus


class CRUDFriendship(CRUDBase[Friendship, dict, dict]):
    def for_user(
        self,
        db: Session,
        *,
        user_id: str,
        status: Optional[FriendshipStatus] = None,
    ) -> List[Friendship]:
        """Friendships where ``user_id`` is either participant."""
        stmt = select(Friendship).where(
            or_(Friendship.user_id_1 == user_id, Friendship.user_id_2 == user_id)
        )
        if status is not None:
            stmt = stmt.where(Friendship.status == status.value)
        stmt = stmt.order_by(Friendship.created_at.asc())
        return list(db.scalars(stmt).all())

    def between(self, db: Session, *, user_a: str, user_b: str) -> Optional[Friendship]:
        """Friendship row linking the two users, whichever of them asked."""
        stmt = select(Friendship).where(
            or_(
                and_(Friendship.user_id_1 == user_a, Friendship.user_id_2 == user_b),
                and_(Friendship.user_id_1 == user_b, Friendship.user_id_2 == user_a),
            )
        ).limit(1)
        return db.scalars(stmt).first()


crud_friendship = CRUDFriendship(Friendship)
