"""
Transport-level errors raised by the request handlers.

Each carries the HTTP status it maps to; the app renders them as
``{"detail": message}``.
"""
from __future__ import annotations


class HandlerError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class BadRequest(HandlerError):
    """Raised when input fails validation before reaching the data layer."""

    status_code = 400


class InternalError(HandlerError):
    """Raised for any failure reported by the data layer."""

    status_code = 500
