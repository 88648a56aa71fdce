"""Password hashing and bearer tokens for the identity provider.

A token's ``sub`` claim is the user id, which is also the caller identity
the row policies are evaluated against.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from friendzone.config import settings
from friendzone.core.exceptions import InvalidCredentialsException


# PBKDF2 needs no native backend
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_DAYS = settings.ACCESS_TOKEN_EXPIRE_DAYS


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # unknown hash format
        return False


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed token for ``user_id``.

    Expires after ``expires_delta``, or ``ACCESS_TOKEN_EXPIRE_DAYS`` days.
    """
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS)
    claims = {"sub": user_id, "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=ALGORITHM)


def read_token_subject(token: str) -> str:
    """Return the user id carried by ``token``.

    Raises:
        InvalidCredentialsException: bad signature, expired, or no subject
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise InvalidCredentialsException("Could not validate credentials") from e

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidCredentialsException("Could not validate credentials")
    return user_id
