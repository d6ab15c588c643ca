"""Parsing of client-supplied resource ids (UUID strings)."""

import uuid
from typing import Any, Optional

from noteful.exceptions import ValidationError


def try_parse_id(value: Any) -> Optional[uuid.UUID]:
    """Returns the UUID for `value`, or None when it is not a syntactically valid id."""
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


def parse_id(value: Any, field: str = "id") -> uuid.UUID:
    """Like try_parse_id, but a malformed id is a 400."""
    parsed = try_parse_id(value)
    if parsed is None:
        raise ValidationError(
            message=f"The `{field}` is not valid",
            field=field,
        )
    return parsed
