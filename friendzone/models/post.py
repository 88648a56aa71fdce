"""Post model for the news feed."""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base, generate_uuid, utcnow


class Post(Base):
    """A status update written by a profile."""

    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    # Foreign Keys
    user_id = Column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Post Content
    content = Column(Text, nullable=False)
    image_url = Column(Text, nullable=False, default="", server_default="")

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    # Constraints & Indexes
    __table_args__ = (
        # Feed is read newest first
        Index("idx_posts_created_at", "created_at"),
    )

    # Dependent rows (comments, likes) are removed by ON DELETE CASCADE in the
    # database, so only the many-to-one side is mapped.
    author = relationship("Profile", foreign_keys=[user_id])
