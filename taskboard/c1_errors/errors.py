"""Exceptions raised by the Taskboard core.

Every error carries a stable machine-readable ``code`` and the HTTP status
it maps to. None of them are retried internally; ``StoreUnavailable`` is the
only one a caller may reasonably retry.
"""

from typing import Optional


class TaskboardError(Exception):
    """Base class for all errors surfaced to API callers."""

    code = "internal_error"
    status_code = 500
    default_message = "Something went wrong on the server"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(TaskboardError):
    code = "validation_failed"
    status_code = 400
    default_message = "Invalid request"


class DuplicateEmail(TaskboardError):
    code = "duplicate_email"
    status_code = 400
    default_message = "Email already in use"


class InvalidCredentials(TaskboardError):
    """Wrong email or password. The two cases are deliberately indistinguishable."""

    code = "invalid_credentials"
    status_code = 401
    default_message = "Invalid email or password"


class Unauthenticated(TaskboardError):
    code = "unauthenticated"
    status_code = 401
    default_message = "Authentication required"

    # Finer-grained reason for logs; callers only ever see ``code``.
    reason = "missing"


class InvalidToken(Unauthenticated):
    default_message = "Invalid session token"
    reason = "invalid"


class TokenExpired(Unauthenticated):
    default_message = "Session token has expired"
    reason = "expired"


class Forbidden(TaskboardError):
    code = "forbidden"
    status_code = 403
    default_message = "Not authorized to perform this operation"


class NotFound(TaskboardError):
    code = "not_found"
    status_code = 404
    default_message = "Resource not found"


class StoreUnavailable(TaskboardError):
    code = "store_unavailable"
    status_code = 500
    default_message = "Storage is temporarily unavailable"
