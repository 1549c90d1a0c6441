"""UTC helpers for session timestamps.

Sessions record creation, last activity and completion times. All of them
are UTC-aware so idle-time arithmetic never mixes naive and aware values,
and they render as RFC 3339 strings with a ``Z`` suffix.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Normalize ``dt`` to aware UTC; naive values are taken to be UTC already."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_utc_string(dt: datetime) -> str:
    """RFC 3339 rendering, e.g. ``2024-01-15T10:30:45Z``."""
    return ensure_utc(dt).isoformat().replace("+00:00", "Z")


def seconds_between(start: datetime, end: Optional[datetime] = None) -> float:
    """Seconds from ``start`` to ``end`` (now when omitted); negative if reversed."""
    if end is None:
        end = utc_now()
    return (ensure_utc(end) - ensure_utc(start)).total_seconds()
