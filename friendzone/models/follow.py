"""Follow model: one-directional subscription between profiles."""

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.sql import func
from ..database import Base, generate_uuid, utcnow


class Follow(Base):
    __tablename__ = "follows"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    # Foreign Keys
    follower_id = Column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    following_id = Column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    # Constraints
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
        CheckConstraint("follower_id <> following_id", name="check_follows_not_self"),
    )
