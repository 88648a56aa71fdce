"""Friendship model for mutual friend relationships."""

from enum import Enum
from sqlalchemy import Column, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base, generate_uuid, utcnow


class FriendshipStatus(str, Enum):
    """Friendship request states.

    ``REJECTED`` exists in the schema only; a rejected or cancelled request
    is deleted instead of being stored with this status.
    """
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Friendship(Base):
    """Friend request from ``user_id_1`` (the requester) to ``user_id_2``."""

    __tablename__ = "friendships"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    # Participants
    user_id_1 = Column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id_2 = Column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    status = Column(
        String(20),
        nullable=False,
        default=FriendshipStatus.PENDING.value,
        server_default=FriendshipStatus.PENDING.value,
    )
    requested_by = Column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    # Constraints
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="check_friendship_status",
        ),
        CheckConstraint("user_id_1 <> user_id_2", name="check_friendship_not_self"),
    )

    # Relationships
    requester = relationship("Profile", foreign_keys=[requested_by])

    def other_participant(self, user_id: str) -> str:
        """Return the participant that is not ``user_id``."""
        return self.user_id_2 if self.user_id_1 == user_id else self.user_id_1
