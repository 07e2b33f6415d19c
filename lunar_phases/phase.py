# phase.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
import math


class PhaseKind(str, Enum):
    """
    The four primary phases, in lunation order.

    The order is load-bearing: legacy ids and the detailed collection
    enumerate kinds in exactly this sequence.
    """

    NEW_MOON = "new_moon"
    FIRST_QUARTER = "first_quarter"
    FULL_MOON = "full_moon"
    THIRD_QUARTER = "third_quarter"

    @property
    def position(self) -> int:
        return list(PhaseKind).index(self)

    def next(self) -> "PhaseKind":
        kinds = list(PhaseKind)
        return kinds[(self.position + 1) % len(kinds)]


PHASE_NAMES = {
    PhaseKind.NEW_MOON: "New Moon",
    PhaseKind.FIRST_QUARTER: "1st Quarter",
    PhaseKind.FULL_MOON: "Full Moon",
    PhaseKind.THIRD_QUARTER: "3rd Quarter",
}

PHASE_SHORT_NAMES = {
    PhaseKind.NEW_MOON: "NM",
    PhaseKind.FIRST_QUARTER: "1Q",
    PhaseKind.FULL_MOON: "FM",
    PhaseKind.THIRD_QUARTER: "3Q",
}

WAXING = frozenset({PhaseKind.NEW_MOON, PhaseKind.FIRST_QUARTER})
WANING = frozenset({PhaseKind.FULL_MOON, PhaseKind.THIRD_QUARTER})

# Average synodic month
SYNODIC_MONTH = 29.53058867


# ---------------------------
# Helpers
# ---------------------------

def format_name(base: str, offset: int) -> str:
    """'Full Moon' for offset 0, otherwise 'Full Moon+2' / 'Full Moon-1'."""
    if offset == 0:
        return base
    sign = "+" if offset > 0 else ""
    return f"{base}{sign}{offset}"


def _illumination_from_cycle(cycle: float) -> float:
    """
    Illumination formula:
      (1 − cos(2π * cycle)) / 2
    """
    angle = 2 * math.pi * (cycle % 1.0)
    return (1 - math.cos(angle)) / 2


# ---------------------------
# Value objects
# ---------------------------

@dataclass(frozen=True)
class PhaseEvent:
    kind: PhaseKind
    instant: datetime  # aware, UTC, whole seconds


@dataclass(frozen=True)
class Result:
    """
    Outcome of a lookup.

      result = for_date(date(2025, 1, 16), "Australia/Brisbane")
      result.primary_phase  # PhaseKind.FULL_MOON
      result.offset         # 2
      result.phase_time     # 2025-01-13 22:27:00+00:00
      result.name           # "Full Moon+2"
      result.short_name     # "FM+2"
    """

    date: date
    timezone: str
    primary_phase: PhaseKind
    offset: int
    phase_time: datetime
    # position in the lunation at the reference instant, 0 new .. 0.5 full
    cycle: float = field(default=0.0, compare=False)

    @property
    def name(self) -> str:
        return format_name(PHASE_NAMES[self.primary_phase], self.offset)

    @property
    def short_name(self) -> str:
        return format_name(PHASE_SHORT_NAMES[self.primary_phase], self.offset)

    @property
    def is_primary(self) -> bool:
        return self.offset == 0

    @property
    def is_waxing(self) -> bool:
        return self.primary_phase in WAXING

    @property
    def is_waning(self) -> bool:
        return self.primary_phase in WANING

    @property
    def age(self) -> float:
        """Days since the preceding new moon, interpolated between tabulated phases."""
        return self.cycle * SYNODIC_MONTH

    @property
    def illumination(self) -> float:
        """Approximate illuminated fraction (0..1) at the reference instant."""
        return _illumination_from_cycle(self.cycle)
