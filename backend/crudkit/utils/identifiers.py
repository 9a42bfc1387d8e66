from __future__ import annotations

import re
from uuid import UUID

_UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_uuid(value: object) -> bool:
    """Return True for UUID instances and canonical 8-4-4-4-12 hex strings."""

    if isinstance(value, UUID):
        return True
    if not isinstance(value, str):
        return False
    return _UUID_PATTERN.fullmatch(value) is not None


def parse_uuid(value: UUID | str) -> UUID:
    """Convert a canonical UUID string into a UUID, raising ValueError otherwise."""

    if isinstance(value, UUID):
        return value
    if not is_uuid(value):
        raise ValueError(f"{value!r} is not a valid UUID")
    return UUID(value)
