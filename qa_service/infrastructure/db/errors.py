"""Inspection of errors reported by the backing store."""
from __future__ import annotations

from sqlalchemy.exc import DBAPIError

# PostgreSQL SQLSTATE codes
FOREIGN_KEY_VIOLATION = "23503"

_SQLITE_FOREIGN_KEY_MESSAGE = "FOREIGN KEY constraint failed"


def sqlstate_of(error: DBAPIError) -> str | None:
    """Return the SQLSTATE carried by the driver error, if the driver reports one."""
    orig = error.orig
    # psycopg exposes ``sqlstate``; asyncpg and psycopg2 adapters expose ``pgcode``
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def is_foreign_key_violation(error: DBAPIError) -> bool:
    code = sqlstate_of(error)
    if code is not None:
        return code == FOREIGN_KEY_VIOLATION
    return _SQLITE_FOREIGN_KEY_MESSAGE in str(error.orig)
