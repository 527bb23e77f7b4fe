"""
Cup key helpers.

A cup is a calendar month, keyed "<year>-<month>" (e.g. "2024-1"). All
derivation goes through cup_key_for so callers can pass a fixed instant.
"""

from datetime import datetime, timezone
from typing import Callable

import pytz

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _localize(instant: datetime, timezone_name: str) -> datetime:
    tz = pytz.timezone(timezone_name)
    if instant.tzinfo is None:
        # Naive timestamps are treated as UTC
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(tz)


def cup_key_for(instant: datetime, timezone_name: str = 'UTC') -> str:
    """Cup key of the month containing instant, in the cup's timezone."""
    local = _localize(instant, timezone_name)
    return f"{local.year}-{local.month}"


def format_cup_key(cup_key: str) -> str:
    """Human form used in headings, "2024-1" -> "2024/1"."""
    year, month = cup_key.split('-', 1)
    return f"{year}/{month}"
