"""Core module exports."""

from .security import (
    create_access_token,
    get_password_hash,
    read_token_subject,
    verify_password,
    ALGORITHM,
    ACCESS_TOKEN_EXPIRE_DAYS,
)

__all__ = [
    "create_access_token",
    "get_password_hash",
    "read_token_subject",
    "verify_password",
    "ALGORITHM",
    "ACCESS_TOKEN_EXPIRE_DAYS",
]
