"""Input parsing helpers shared by services and routes."""

from __future__ import annotations

import re
from typing import Any

from vidtube.services._shared.errors import InvalidInputError

# ids are stored in signed 64-bit integer columns
MAX_ID = 2**63 - 1

_DIGITS = re.compile(r"[0-9]+")


def parse_id(value: Any, name: str) -> int:
    """
    Parse a positive integer identifier.

    :param value: Raw id (path segment, query or JSON value).
    :param name: Public field name used in the error (e.g. ``"videoId"``).
    :returns: The id as ``int``.
    :raises InvalidInputError: ``"Valid <name> is required!"`` when the value
        is missing, non-numeric, not positive or above ``MAX_ID``.
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"Valid {name} is required!")
    if isinstance(value, int):
        parsed = value
    else:
        raw = str(value or "").strip()
        if not _DIGITS.fullmatch(raw):
            raise InvalidInputError(f"Valid {name} is required!")
        parsed = int(raw)
    if parsed <= 0 or parsed > MAX_ID:
        raise InvalidInputError(f"Valid {name} is required!")
    return parsed


def require_fields(values: dict[str, Any], *names: str, message: str = "All fields are required!") -> None:
    """Reject missing or whitespace-only string fields.

    :raises InvalidInputError: With ``message`` when any field is blank.
    """
    for name in names:
        value = values.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise InvalidInputError(message)
