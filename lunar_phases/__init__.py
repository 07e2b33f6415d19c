"""
Timezone-aware moon phase lookups for dates between 2000 and 2050.

    import lunar_phases

    # Phase for a local date
    lunar_phases.for_date(date(2025, 1, 14), "Australia/Brisbane").name
    # "Full Moon"

    # Phase for a UTC instant, seen from a zone
    r = lunar_phases.for_datetime("2025-01-13T20:00:00Z", "Australia/Brisbane")
    r.name, r.date   # ("Full Moon", date(2025, 1, 14))

    lunar_phases.is_full_moon(date(2025, 1, 13), "Europe/London")   # True
    lunar_phases.is_new_moon(date(2025, 1, 29), "Australia/Brisbane")  # True

Use `for_date` when the date is already local, `for_datetime` when you hold
an absolute timestamp.

Phase instants are derived from the tables published by the Astronomical
Applications Department of the U.S. Naval Observatory.
"""

from .catalog import collection, detailed_collection, legacy_id_lookup as for_id
from .errors import DataError, LunarPhasesError, OutOfRangeError, UnknownTimezoneError
from .phase import PHASE_NAMES, PHASE_SHORT_NAMES, PhaseEvent, PhaseKind, Result
from .resolver import (
    is_full_moon,
    is_new_moon,
    phases_in_range,
    resolve_date as for_date,
    resolve_instant as for_datetime,
    valid_range,
)
from .table import PhaseTable
from .version import __version__

__all__ = [
    "DataError",
    "LunarPhasesError",
    "OutOfRangeError",
    "PHASE_NAMES",
    "PHASE_SHORT_NAMES",
    "PhaseEvent",
    "PhaseKind",
    "PhaseTable",
    "Result",
    "UnknownTimezoneError",
    "__version__",
    "collection",
    "detailed_collection",
    "for_date",
    "for_datetime",
    "for_id",
    "is_full_moon",
    "is_new_moon",
    "phases_in_range",
    "valid_range",
]
