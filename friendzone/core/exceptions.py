"""Custom exceptions for the Hyper Friends Zone application."""

from fastapi import HTTPException, status


class StoreError(Exception):
    """Base class for failures raised by the data store itself."""


class AccessDeniedError(StoreError):
    """A row-level access policy rejected the operation.

    The operation is refused before anything is written; callers only ever
    see the generic "operation failed" response built from this.
    """

    def __init__(self, table: str, operation: str):
        self.table = table
        self.operation = operation
        super().__init__(f"{operation} on '{table}' is not permitted for this caller")


class OperationFailedException(HTTPException):
    """Generic failure returned to the client for any rejected store operation."""

    def __init__(self, detail: str = "Operation failed"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class InvalidCredentialsException(HTTPException):
    """Raised when the email or password is wrong."""

    def __init__(self, detail: str = "Incorrect email or password"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundException(HTTPException):
    """
    Raised when a row does not exist or is not visible to the caller.

    Rows hidden by a select policy are indistinguishable from rows that do
    not exist, so both produce the same 404.

    Usage:
        >>> raise NotFoundException("Post not found")
    """

    def __init__(self, detail: str = "Not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class ConflictException(HTTPException):
    """Raised when the requested relationship already exists."""

    def __init__(self, detail: str = "Already exists"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )


__all__ = [
    "StoreError",
    "AccessDeniedError",
    "OperationFailedException",
    "InvalidCredentialsException",
    "NotFoundException",
    "ConflictException",
]
