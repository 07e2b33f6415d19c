# resolver.py
"""
Civil-calendar lookups against the phase table.

A query date is represented by local noon in the query's zone, matched to
the nearest tabulated phase instant, and the offset is counted between the
query date and the phase's own local date in that same zone. Noon keeps the
match centred on the day, so far-from-UTC zones are not pulled towards the
neighbouring date.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import List, Tuple, Union
from zoneinfo import ZoneInfo

import pandas as pd

from . import config
from .errors import OutOfRangeError, UnknownTimezoneError
from .phase import PhaseEvent, PhaseKind, Result
from .table import PhaseTable, get_table
from .zones import as_utc, find_timezone, local_to_utc, utc_to_local_date

DateLike = Union[date, datetime, str]
InstantLike = Union[datetime, str]

NOON = time(12, 0, 0)
DAY_START = time(0, 0, 0)

# No zone is a full day away from UTC
ZONE_SLACK = timedelta(days=1)


# ---------------------------
# Helpers
# ---------------------------

def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        ts = pd.Timestamp(value)
    except (ValueError, TypeError) as exc:
        raise ValueError(f"Invalid date: {value!r}") from exc
    if pd.isna(ts):
        raise ValueError(f"Invalid date: {value!r}")
    return ts.date()


def _to_instant(value: InstantLike) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    try:
        ts = pd.Timestamp(value)
    except (ValueError, TypeError) as exc:
        raise ValueError(f"Invalid datetime: {value!r}") from exc
    if pd.isna(ts):
        raise ValueError(f"Invalid datetime: {value!r}")
    return as_utc(ts.to_pydatetime())


def _local_bounds(table: PhaseTable, zone: ZoneInfo) -> Tuple[date, date]:
    first, last = table.range()
    return utc_to_local_date(zone, first), utc_to_local_date(zone, last)


def _check_range(day: date, start: date, end: date, slack: timedelta = timedelta(0)) -> None:
    if not start - slack <= day <= end + slack:
        raise OutOfRangeError(day, start, end)


def _result(event: PhaseEvent, day: date, timezone: str, offset: int, cycle: float) -> Result:
    return Result(
        date=day,
        timezone=timezone,
        primary_phase=event.kind,
        offset=offset,
        phase_time=event.instant,
        cycle=cycle,
    )


# ---------------------------
# Lookups
# ---------------------------

def resolve_date(value: DateLike, timezone: str = config.DEFAULT_TIMEZONE) -> Result:
    """
    Nearest primary phase for a local calendar date.

    Raises OutOfRangeError outside the tabulated window and
    UnknownTimezoneError for names the tz database does not know.

      resolve_date(date(2025, 1, 14), "Australia/Brisbane").name  # "Full Moon"
      resolve_date("2025-01-16", "Europe/London").name             # "Full Moon+3"
    """
    day = _to_date(value)
    table = get_table()

    try:
        zone = find_timezone(timezone)
    except UnknownTimezoneError:
        # Without a zone only the UTC window is known; a date outside it
        # is reported first.
        first, last = table.range()
        _check_range(day, first.date(), last.date(), slack=ZONE_SLACK)
        raise
    _check_range(day, *_local_bounds(table, zone))

    midday = local_to_utc(zone, day, NOON)
    event = table.nearest(midday)
    offset = (day - utc_to_local_date(zone, event.instant)).days
    return _result(event, day, timezone, offset, table.cycle_fraction(midday))


def resolve_instant(value: InstantLike, timezone: str = config.DEFAULT_TIMEZONE) -> Result:
    """
    Phase for an absolute instant as seen from `timezone`.

    The instant is first turned into its local date there, so the same
    instant can land on different dates (and results) in different zones:
    20:00 UTC on 2025-01-13 is already 2025-01-14 in Brisbane.
    """
    instant = _to_instant(value)
    zone = find_timezone(timezone)
    return resolve_date(utc_to_local_date(zone, instant), timezone)


def is_full_moon(value: DateLike, timezone: str = config.DEFAULT_TIMEZONE) -> bool:
    result = resolve_date(value, timezone)
    return result.primary_phase is PhaseKind.FULL_MOON and result.offset == 0


def is_new_moon(value: DateLike, timezone: str = config.DEFAULT_TIMEZONE) -> bool:
    result = resolve_date(value, timezone)
    return result.primary_phase is PhaseKind.NEW_MOON and result.offset == 0


def phases_in_range(
    start: DateLike,
    end: DateLike,
    timezone: str = config.DEFAULT_TIMEZONE,
) -> List[Result]:
    """
    Every primary phase whose local date falls within `start`..`end`,
    each reported on that local date (offset 0).
    """
    start_day, end_day = _to_date(start), _to_date(end)
    zone = find_timezone(timezone)
    table = get_table()

    # Widen the UTC window, then decide by local date: wall-clock bounds
    # are ambiguous when clocks repeat an hour around midnight.
    candidates = table.between(
        local_to_utc(zone, start_day, DAY_START) - ZONE_SLACK,
        local_to_utc(zone, end_day + timedelta(days=1), DAY_START) + ZONE_SLACK,
    )
    results = []
    for e in candidates:
        local_day = utc_to_local_date(zone, e.instant)
        if start_day <= local_day <= end_day:
            results.append(_result(e, local_day, timezone, 0, table.cycle_fraction(e.instant)))
    return results


def valid_range(timezone: str = config.DEFAULT_TIMEZONE) -> Tuple[date, date]:
    """Earliest and latest local dates that can be looked up in `timezone`."""
    return _local_bounds(get_table(), find_timezone(timezone))
