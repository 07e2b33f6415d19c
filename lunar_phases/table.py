# table.py
"""
The chronological table of primary phase instants.

The bundled CSV holds one row per phase (`phase,utc`). It is parsed once per
process with pandas and kept as an immutable PhaseTable; lookups are binary
searches over the sorted instants.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from datetime import datetime, timezone
import logging
from pathlib import Path
import threading
from typing import Iterator, List, Optional, Sequence, Tuple

import pandas as pd

from . import config
from .errors import DataError
from .phase import PhaseEvent, PhaseKind

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("phase", "utc")


class PhaseTable:
    def __init__(self, events: Sequence[PhaseEvent]):
        if not events:
            raise DataError("Phase table is empty")
        for prev, cur in zip(events, events[1:]):
            if cur.instant <= prev.instant:
                raise DataError(
                    f"Phase instants must strictly increase ({prev.instant} then {cur.instant})"
                )
            if cur.kind is not prev.kind.next():
                raise DataError(
                    f"Phase {cur.kind.value} at {cur.instant} breaks the rotation after {prev.kind.value}"
                )
        self._events: Tuple[PhaseEvent, ...] = tuple(events)
        self._instants: List[datetime] = [e.instant for e in self._events]

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "PhaseTable":
        """
        Parse the phase dataset. Raises DataError when the file is missing,
        unreadable, or any row fails to parse.
        """
        path = Path(path or config.DATA_PATH)
        try:
            table = cls(_read_events(path))
        except DataError as exc:
            logger.error("Could not load phase table from %s: %s", path, exc)
            raise
        logger.info("Loaded %d lunar phases from %s", len(table), path)
        return table

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[PhaseEvent]:
        return iter(self._events)

    def nearest(self, instant: datetime) -> PhaseEvent:
        """Event closest to `instant`; the earlier one wins an exact tie."""
        i = bisect_left(self._instants, instant)
        if i == 0:
            return self._events[0]
        if i == len(self._events):
            return self._events[-1]
        before, after = self._events[i - 1], self._events[i]
        if instant - before.instant <= after.instant - instant:
            return before
        return after

    def cycle_fraction(self, instant: datetime) -> float:
        """
        Position of `instant` in the lunation (0 new, 0.25 first quarter,
        0.5 full, 0.75 third quarter), interpolated linearly between the
        bracketing events. Clamped to the first/last interval at the edges.
        """
        quarter = 1 / len(PhaseKind)
        if len(self._events) == 1:
            return self._events[0].kind.position * quarter
        i = bisect_right(self._instants, instant)
        i = min(max(i, 1), len(self._events) - 1)
        before, after = self._events[i - 1], self._events[i]
        elapsed = (instant - before.instant) / (after.instant - before.instant)
        elapsed = min(max(elapsed, 0.0), 1.0)
        return ((before.kind.position + elapsed) * quarter) % 1.0

    def range(self) -> Tuple[datetime, datetime]:
        return self._instants[0], self._instants[-1]

    def between(self, start: datetime, end: datetime) -> List[PhaseEvent]:
        """Events with start <= instant <= end, in table order."""
        lo = bisect_left(self._instants, start)
        hi = bisect_right(self._instants, end)
        return list(self._events[lo:hi])


def _read_events(path: Path) -> List[PhaseEvent]:
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise DataError(f"Cannot read phase data {path}: {exc}") from exc

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise DataError(f"{path} is missing column(s): {', '.join(missing)}")

    raw_times = df["utc"].str.strip()
    instants = pd.to_datetime(raw_times, utc=True, errors="coerce", format="ISO8601")
    bad = instants.isna()
    if bad.any():
        row = int(bad.to_numpy().nonzero()[0][0])
        # +2: header line, 1-based line numbers
        raise DataError(f"{path} line {row + 2}: invalid timestamp {raw_times.iloc[row]!r}")
    instants = instants.dt.floor("s")

    events: List[PhaseEvent] = []
    for line, (kind_s, ts) in enumerate(zip(df["phase"].str.strip(), instants), start=2):
        try:
            kind = PhaseKind(kind_s)
        except ValueError as exc:
            raise DataError(f"{path} line {line}: unknown phase {kind_s!r}") from exc
        events.append(PhaseEvent(kind=kind, instant=ts.to_pydatetime().astimezone(timezone.utc)))
    return events


# ---------------------------
# Process-wide cache
# ---------------------------

_table: Optional[PhaseTable] = None
_table_lock = threading.Lock()


def get_table() -> PhaseTable:
    """
    The memoized bundled table. Loaded at most once, even when several
    threads ask at the same time; a failed load leaves the cache empty so the
    next call tries again.
    """
    global _table
    table = _table
    if table is not None:
        return table
    with _table_lock:
        if _table is None:
            _table = PhaseTable.load()
        return _table


def reset_table() -> None:
    global _table
    with _table_lock:
        _table = None
