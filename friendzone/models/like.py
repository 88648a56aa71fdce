"""Like model for post likes."""

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from ..database import Base, generate_uuid, utcnow


class Like(Base):
    """A profile liking a post."""

    __tablename__ = "likes"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    # Foreign Keys
    post_id = Column(
        String(36),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    # Constraints
    __table_args__ = (
        # One like per user per post
        UniqueConstraint("post_id", "user_id", name="uq_likes_post_user"),
    )
