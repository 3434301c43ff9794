"""Request-scoped context for log correlation.

Every log entry emitted while a request is being handled carries the
request and client identifiers bound here.
"""
from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import structlog

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_client_id: ContextVar[str | None] = ContextVar("client_id", default=None)

# Header names (case-insensitive in HTTP)
REQUEST_ID_HEADER = "X-Request-ID"
CLIENT_ID_HEADER = "X-Client-ID"


def _generate_id() -> str:
    return str(uuid.uuid4())[:8]


def get_request_id() -> str | None:
    return _request_id.get()


def get_client_id() -> str | None:
    return _client_id.get()


def set_request_id(request_id: str | None = None) -> str:
    """Set a request ID in context. Generates one if not provided."""
    rid = request_id or _generate_id()
    _request_id.set(rid)
    return rid


def set_client_id(client_id: str | None = None) -> str:
    """Set a client ID in context. Generates one if not provided."""
    cid = client_id or _generate_id()
    _client_id.set(cid)
    return cid


def clear_request_context() -> None:
    _request_id.set(None)
    _client_id.set(None)
    structlog.contextvars.clear_contextvars()


def bind_request_context(**context: Any) -> None:
    structlog.contextvars.bind_contextvars(**context)


@contextmanager
def request_context(
    request_id: str | None, client_id: str | None, **context: Any
) -> Iterator[tuple[str, str]]:
    """Bind correlation IDs for the duration of one request.

    Missing IDs are generated. Yields the ``(request_id, client_id)`` pair
    actually in use so callers can echo them back to the client.

    Example:
        with request_context(headers.get("x-request-id"), None, path="/questions") as (rid, cid):
            ...
    """
    rid = set_request_id(request_id)
    cid = set_client_id(client_id)
    bind_request_context(request_id=rid, client_id=cid, **context)
    try:
        yield rid, cid
    finally:
        clear_request_context()
