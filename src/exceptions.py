"""Application error types.

Services raise these; the handlers registered in ``src.main`` turn them into
JSON responses. Nothing below this layer knows about HTTP responses, only the
status code each error kind maps to.
"""

from enum import Enum


class AppError(Exception):
    """Base exception for all assignment tracker errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Raised when required fields are missing or malformed."""

    status_code = 400
    default_message = "Invalid request"


class AuthErrorReason(str, Enum):
    """Why a presented credential was rejected."""

    MISSING = "missing"
    MALFORMED = "malformed"
    EXPIRED = "expired"
    UNKNOWN_SUBJECT = "unknown_subject"
    BAD_CREDENTIALS = "bad_credentials"


class AuthError(AppError):
    """Raised when the caller cannot be authenticated."""

    status_code = 401
    default_message = "Invalid authentication credentials"

    def __init__(self, reason: AuthErrorReason, message: str | None = None):
        self.reason = reason
        super().__init__(message)


class NotFoundError(AppError):
    """Raised when no record matches the requested id for the caller."""

    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    """Raised when a record would violate a uniqueness rule.

    Reported as 400 so clients of the original register endpoint keep working.
    """

    status_code = 400
    default_message = "Conflict"


class InternalError(AppError):
    """Raised when the persistence layer fails unexpectedly."""

    status_code = 500
