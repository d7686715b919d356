"""
Timestamp helpers shared by both schedulers.

All engine timestamps are timezone-aware UTC datetimes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so comparisons never mix naive and aware values."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def resolve_now(now: Optional[datetime]) -> datetime:
    """The caller's clock if given, else the current UTC time."""
    return ensure_utc(now) if now is not None else utc_now()
