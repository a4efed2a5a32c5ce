"""Error taxonomy for Taskboard."""

from taskboard.c1_errors.errors import (
    TaskboardError,
    ValidationFailed,
    DuplicateEmail,
    InvalidCredentials,
    Unauthenticated,
    InvalidToken,
    TokenExpired,
    Forbidden,
    NotFound,
    StoreUnavailable,
)

__all__ = [
    "TaskboardError",
    "ValidationFailed",
    "DuplicateEmail",
    "InvalidCredentials",
    "Unauthenticated",
    "InvalidToken",
    "TokenExpired",
    "Forbidden",
    "NotFound",
    "StoreUnavailable",
]
