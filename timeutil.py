"""
Timestamp helpers for the ranked feed

The upstream API is not consistent about units: durations and match dates
arrive either in seconds or in milliseconds. Both are told apart with a
fixed threshold.
"""

import math
from datetime import datetime, timezone
from typing import Any, Optional

# below this a duration is read as seconds (~27.7h of raw value)
DURATION_SECONDS_LIMIT = 100000
# below this an epoch timestamp is read as seconds
EPOCH_SECONDS_LIMIT = 9999999999

MISSING = "—"


def _to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def duration_to_ms(value: Any) -> Optional[float]:
    number = _to_number(value)
    if number is None:
        return None
    return number * 1000 if number < DURATION_SECONDS_LIMIT else number


def timestamp_to_ms(value: Any) -> Optional[float]:
    number = _to_number(value)
    if number is None:
        return None
    return number * 1000 if number < EPOCH_SECONDS_LIMIT else number


def timestamp_to_datetime(value: Any) -> Optional[datetime]:
    """
    Convert a match date into an aware UTC datetime

    Args:
        value: epoch value in seconds or milliseconds

    Returns:
        datetime in UTC, or None when the value is missing, zero or invalid
    """
    ms = timestamp_to_ms(value)
    if not ms:
        return None
    try:
        return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def format_duration(value: Any) -> str:
    """Render a match duration as `1h 2m 3s` or `2m 3s`."""
    ms = duration_to_ms(value)
    if ms is None:
        return MISSING

    total_seconds = int(ms // 1000)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    return f"{minutes}m {seconds}s"
