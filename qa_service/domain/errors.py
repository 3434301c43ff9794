"""
Errors raised by the data access layer.

DAOs never raise HTTP-aware errors; the handlers translate these into
transport-level failures.
"""
from __future__ import annotations


class DBError(Exception):
    """Base error for all data access failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidUUIDError(DBError):
    """Raised when an identifier is malformed or references no existing entity."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid UUID provided: {detail}")
        self.detail = detail


class StorageError(DBError):
    """Raised for any other failure of the backing store."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Database error: {cause}")
        self.cause = cause
