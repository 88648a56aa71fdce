"""Profile model: public face of an account."""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from ..database import Base, utcnow


class Profile(Base):
    """One profile per identity; ``id`` is the identity id itself."""

    __tablename__ = "profiles"

    id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    username = Column(String(30), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=False, default="", server_default="")
    avatar_url = Column(Text, nullable=False, default="", server_default="")
    bio = Column(Text, nullable=False, default="", server_default="")

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )
