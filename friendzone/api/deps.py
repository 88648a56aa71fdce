"""Request-scoped dependencies: sessions and the authenticated caller.

Two kinds of session are handed out. ``get_db`` gives an unpoliced service
session, used by the identity provider only. ``get_caller_db`` gives a
session bound to the authenticated user, on which every read and write goes
through the row policies.
"""

import logging
from typing import Iterator

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from friendzone.core.exceptions import InvalidCredentialsException
from friendzone.core.policies import bind_caller
from friendzone.core.security import read_token_subject
from friendzone.crud import crud_user
from friendzone.database import SessionLocal
from friendzone.models.user import User

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to its account; 401 if either is unknown."""
    try:
        user_id = read_token_subject(token)
    except InvalidCredentialsException:
        logger.warning("[AUTH] Rejected bearer token")
        raise

    user = crud_user.get(db, user_id)
    if user is None:
        logger.warning(f"[AUTH] Token subject has no account: {user_id}")
        raise InvalidCredentialsException("Could not validate credentials")

    logger.debug(f"[AUTH] Caller resolved: id={user.id}")
    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
    return current_user


def get_caller_db(
    current_user: User = Depends(get_current_active_user),
) -> Iterator[Session]:
    db = bind_caller(SessionLocal(), current_user.id)
    try:
        yield db
    finally:
        db.close()


__all__ = [
    "oauth2_scheme",
    "get_db",
    "get_current_user",
    "get_current_active_user",
    "get_caller_db",
]
