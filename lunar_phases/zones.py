# zones.py
"""
The one place that talks to the IANA timezone database (via zoneinfo).

Everything else goes through three calls: resolve a name, turn a local
wall-clock time into UTC, and turn a UTC instant into a local date.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import UnknownTimezoneError


def find_timezone(name: str) -> ZoneInfo:
    # region directories such as "America" surface as IsADirectoryError
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError, OSError) as exc:
        raise UnknownTimezoneError(name) from exc


def as_utc(instant: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def local_to_utc(zone: ZoneInfo, day: date, at: time) -> datetime:
    return datetime.combine(day, at, tzinfo=zone).astimezone(timezone.utc)


def utc_to_local_date(zone: ZoneInfo, instant: datetime) -> date:
    return instant.astimezone(zone).date()
