# File: utils/dt_utils.py
"""Date and time utilities for orgboard.

Functions:
    - dt_now_utc: Current timezone-aware UTC datetime
    - dt_now_iso: Current UTC datetime as ISO string
"""

from __future__ import annotations

from datetime import UTC, datetime


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware).

    Returns:
        Current UTC datetime.
    """
    return datetime.now(UTC)


def dt_now_iso() -> str:
    """Return the current UTC datetime as an ISO 8601 string.

    Example:
        "2026-04-07T14:30:00.123456+00:00"
    """
    return dt_now_utc().isoformat()
