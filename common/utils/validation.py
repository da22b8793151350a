"""Helpers for validating identifiers supplied by users."""

import uuid
from typing import Optional


URN_PREFIX = "urn:uuid:"
HYPHEN_POSITIONS = (8, 13, 18, 23)


def _canonical_form(value: str) -> str:
    """Strip the urn and brace wrappers, insisting on the accepted layouts.

    ``uuid.UUID`` drops hyphens anywhere in the string, so the hyphen
    positions of the 36 character form are checked here.
    """
    if len(value) == 45 and value[: len(URN_PREFIX)].lower() == URN_PREFIX:
        value = value[len(URN_PREFIX):]
    elif len(value) == 38 and value[0] == "{" and value[-1] == "}":
        value = value[1:-1]
    elif len(value) == 32:
        if "-" in value:
            raise ValueError(f"invalid UUID format: {value!r}")
        return value
    elif len(value) != 36:
        raise ValueError(f"invalid UUID length: {len(value)}")

    if any(value[i] != "-" for i in HYPHEN_POSITIONS):
        raise ValueError(f"invalid UUID format: {value!r}")
    return value


def parse_uuid(value: Optional[str]) -> uuid.UUID:
    """Parse a UUID string.

    Args:
        value: Candidate UUID string

    Returns:
        Parsed UUID

    Raises:
        ValueError: If the value is empty or not a UUID
    """
    if not value:
        raise ValueError("invalid UUID length: 0")
    if not isinstance(value, str):
        raise ValueError(f"invalid UUID format: {value!r}")
    canonical = _canonical_form(value)
    try:
        return uuid.UUID(canonical)
    except ValueError as e:
        raise ValueError(f"invalid UUID format: {value!r}") from e


def is_uuid(value: Optional[str]) -> bool:
    """Return True if the value parses as a UUID."""
    try:
        parse_uuid(value)
    except ValueError:
        return False
    return True
