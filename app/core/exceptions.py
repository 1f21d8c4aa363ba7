"""Application exceptions.

Every error the API reports is an AppError subclass carrying the HTTP status
code and a client-facing message; exception handlers render them into the
``{"success": false, "message": ..., "error": ...}`` envelope.
"""

from typing import Any


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, error: Any = None) -> None:
        self.message = message or self.default_message
        self.error = error
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or invalid request fields."""

    status_code = 400
    default_message = "Missing fields"


class DatabaseError(AppError):
    """Persistence failure."""

    status_code = 500
    default_message = "DB error"


class CurrencyRateError(AppError):
    """The currency rate gateway was unreachable or returned a malformed table."""

    status_code = 500
    default_message = "Failed to fetch currency rates"
