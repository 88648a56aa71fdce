from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func
from ..database import Base, generate_uuid, utcnow


class User(Base):
    """Identity provider account. Its id is the caller identity used by every access policy."""

    __tablename__ = "users"

    # Primary Key
    id = Column(String(36), primary_key=True, default=generate_uuid)

    # Authentication
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Account Status
    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
