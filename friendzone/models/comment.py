"""Comment model for post comments."""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base, generate_uuid, utcnow


class Comment(Base):
    """Comment left on a post."""

    __tablename__ = "comments"

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

    # Comment Content
    content = Column(Text, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    # Relationships
    author = relationship("Profile", foreign_keys=[user_id])
