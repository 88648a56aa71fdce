"""CRUD operations for the identity provider's `User` model."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from friendzone.core.security import get_password_hash, verify_password
from friendzone.crud.base import CRUDBase
from friendzone.models.user import User


class CRUDUser(CRUDBase[User, dict, dict]):
    def get_by_email(self, db: Session, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        stmt = select(User).where(User.email == email.strip().lower()).limit(1)
        return db.scalars(stmt).first()

    def create_user(self, db: Session, *, email: str, password: str) -> User:
        """Create an account. The caller commits, so the profile can share the transaction."""
        db_obj = User(email=email.strip().lower(), password_hash=get_password_hash(password))
        db.add(db_obj)
        db.flush()
        return db_obj

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user


crud_user = CRUDUser(User)
