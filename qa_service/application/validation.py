from __future__ import annotations

from qa_service.application.errors import BadRequest
from qa_service.domain.identifiers import is_valid_uuid


def require_field(value: str, message: str) -> None:
    if not value:
        raise BadRequest(message)


def require_uuid(value: str, message: str) -> None:
    if not is_valid_uuid(value):
        raise BadRequest(message)
