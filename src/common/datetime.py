"""Datetime utilities."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

# Timestamps without a UTC offset are rejected.
PUBLISHED_DATE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)


def parse_offset_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse a timestamp carrying a UTC offset, or return None if it can't be parsed."""
    if not value or not isinstance(value, str):
        return None
    value = value.strip()
    for fmt in PUBLISHED_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed
