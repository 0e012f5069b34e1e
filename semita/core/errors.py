"""
Domain errors raised by the services layer.

Routes never catch these individually; the exception handlers registered in
semita.main turn them into an {"error": ...} JSON body with the matching
HTTP status code.
"""

from typing import Optional


class SemitaError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class InvalidArgument(SemitaError):
    """Malformed or missing required field, or unknown enum value."""

    status_code = 400


class NotFound(SemitaError):
    """Reference to a record that does not exist."""

    status_code = 404


class Conflict(SemitaError):
    """Write rejected because a conflicting record already exists."""

    status_code = 409


AlreadyExists = Conflict


class StorageError(SemitaError):
    """The backing store is unavailable or a write failed."""

    status_code = 503
