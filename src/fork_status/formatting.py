"""
Human-readable value formatting for report cells.
"""

import math
from datetime import datetime, timezone

from .data_models import PLACEHOLDER

ELLIPSIS = "…"

# Months and years are fixed 30 and 365 day spans.
_TIME_UNITS: list[tuple[str, int]] = [
    ("second", 1),
    ("minute", 60),
    ("hour", 3600),
    ("day", 86400),
    ("month", 2592000),
    ("year", 31536000),
]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def relative_time(then: datetime | None, now: datetime | None = None) -> str:
    """
    Describe how long ago ``then`` was, e.g. "3 days ago".

    Naive datetimes are taken as UTC. Timestamps in the future report
    "0 seconds ago".

    Args:
        then: Point in time to describe, or None
        now: Reference time (defaults to the current time)

    Returns:
        Relative time string, or "-" when ``then`` is None
    """
    if then is None:
        return PLACEHOLDER

    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    diff = max(0, math.floor((now - _as_utc(then)).total_seconds()))

    # Largest unit that fits into diff
    unit, seconds = _TIME_UNITS[0]
    for candidate, candidate_seconds in _TIME_UNITS[1:]:
        if diff < candidate_seconds:
            break
        unit, seconds = candidate, candidate_seconds

    count = diff // seconds
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def truncate(text: str | None, max_length: int = 25) -> str:
    """Shorten text to ``max_length`` characters plus an ellipsis."""
    if not text:
        return PLACEHOLDER
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text
