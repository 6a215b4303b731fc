"""
utils/errors.py
---------------
Application error taxonomy.

Every error carries the HTTP status it maps to, so handlers can simply
raise and let the exception handlers in ``main.py`` shape the response.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for errors that are reported to API clients."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message: Optional[str] = None, errors: Optional[list[dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class NotFound(AppError):
    """The requested row does not exist."""

    status_code = 404
    default_message = "Not found"


class Conflict(AppError):
    """A uniqueness rule was violated (existing email, duplicate review)."""

    status_code = 400
    default_message = "Resource already exists"


class Unauthorized(AppError):
    """Bad credentials or a missing/invalid bearer token."""

    status_code = 401
    default_message = "Unauthorized"


class StorageError(AppError):
    """Connection or query failure in the database layer."""

    status_code = 500
    default_message = "Database error"


class PoolExhausted(StorageError):
    """No pooled connection became free within the acquire timeout."""

    default_message = "Timed out waiting for a database connection"


class DecodeError(AppError):
    """
    A JSON column could not be parsed.

    Never propagated out of the JSON codec: it only describes the failure
    that gets logged before the empty default is substituted.
    """

    def __init__(self, field: str, record_id: Any, raw: Any) -> None:
        super().__init__(f"Invalid {field} JSON for record {record_id}: {raw!r}")
        self.field = field
        self.record_id = record_id
        self.raw = raw
