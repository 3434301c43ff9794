from __future__ import annotations

import re
import uuid

from qa_service.domain.errors import InvalidUUIDError

_HEX = "[0-9a-fA-F]"
_HYPHENATED = rf"{_HEX}{{8}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{12}}"

# Simple (32 hex digits), hyphenated, braced hyphenated, or URN form.
# uuid.UUID alone also takes "0x", "+", "_" and misplaced hyphens.
_UUID_FORMAT = re.compile(
    rf"{_HEX}{{32}}|{_HYPHENATED}|\{{{_HYPHENATED}\}}|urn:uuid:{_HYPHENATED}"
)


def parse_uuid(value: str) -> uuid.UUID:
    if not isinstance(value, str) or _UUID_FORMAT.fullmatch(value) is None:
        raise InvalidUUIDError(f"invalid UUID format: {value!r}")
    return uuid.UUID(value)


def is_valid_uuid(value: str) -> bool:
    try:
        parse_uuid(value)
    except InvalidUUIDError:
        return False
    return True
