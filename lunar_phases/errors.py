# errors.py
from __future__ import annotations

from datetime import date


class LunarPhasesError(Exception):
    """Base class for everything this package raises."""


class DataError(LunarPhasesError):
    """The phase dataset is missing or malformed."""


class OutOfRangeError(LunarPhasesError, ValueError):
    def __init__(self, day: date, start: date, end: date):
        self.date = day
        self.start = start
        self.end = end
        super().__init__(f"Date {day} is outside valid range ({start} to {end})")


class UnknownTimezoneError(LunarPhasesError, ValueError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown timezone: {name}")
