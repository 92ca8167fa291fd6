"""
Time Utilities

Backend policy: store/query in database as UTC (naive) timestamps.
"""

from __future__ import annotations

from datetime import datetime, timezone

UTC = timezone.utc


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


def utc_now_naive() -> datetime:
    """Return current UTC time as a naive datetime for database columns."""
    return utc_now().replace(tzinfo=None)
