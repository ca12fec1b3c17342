"""
Shared datetime helpers.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


SECONDS_PER_MONTH = 60 * 60 * 24 * 30


def ensure_utc(dt: datetime) -> datetime:
    """Return a timezone-aware UTC datetime."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp and normalize it to UTC."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return ensure_utc(parsed)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def months_since(then: datetime, now: datetime) -> float:
    """Elapsed time between two datetimes in 30-day months."""
    elapsed = ensure_utc(now) - ensure_utc(then)
    return elapsed.total_seconds() / SECONDS_PER_MONTH


def format_date(dt: datetime) -> str:
    """ISO date portion (YYYY-MM-DD) of a datetime, in UTC."""
    return ensure_utc(dt).date().isoformat()
