# annotate.py
"""
Add lunar phase columns to a CSV of dated rows.

    python -m lunar_phases.annotate [events.csv]

Each row needs a `date` column (2025-01-14 or 01/14/2025). A `timezone`
column, when present, overrides LUNAR_PHASES_TIMEZONE for that row.
"""

from __future__ import annotations

import csv
from datetime import date, datetime
from pathlib import Path
import sys
from typing import Dict, List, Optional, Tuple

from . import config
from .catalog import legacy_id
from .errors import OutOfRangeError, UnknownTimezoneError
from .resolver import resolve_date

# Columns we will add/update
MOON_FIELDS = ["moon_phase", "moon_primary", "moon_offset", "moon_id", "moon_illumination"]

DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y")


def parse_date(date_s: str) -> Optional[date]:
    date_s = (date_s or "").strip()
    if not date_s:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(date_s, fmt).date()
        except ValueError:
            continue
    return None


def annotate_row(row: Dict[str, str], timezone: str) -> bool:
    """Fill MOON_FIELDS in place. Returns False (fields blank) when the row can't be resolved."""
    for mf in MOON_FIELDS:
        row[mf] = ""

    day = parse_date(row.get("date", ""))
    if day is None:
        return False

    tz = (row.get("timezone") or "").strip() or timezone
    try:
        result = resolve_date(day, tz)
    except (OutOfRangeError, UnknownTimezoneError):
        return False

    row["moon_phase"] = result.name
    row["moon_primary"] = result.primary_phase.value
    row["moon_offset"] = str(result.offset)
    try:
        row["moon_id"] = str(legacy_id(result.primary_phase, result.offset))
    except ValueError:
        row["moon_id"] = ""
    row["moon_illumination"] = f"{result.illumination:.3f}"
    return True


def annotate_rows(rows: List[Dict[str, str]], timezone: str = config.DEFAULT_TIMEZONE) -> Tuple[int, int]:
    updated = 0
    skipped = 0
    for r in rows:
        if annotate_row(r, timezone):
            updated += 1
        else:
            skipped += 1
    return updated, skipped


def read_table(path: Path) -> Tuple[List[str], List[Dict[str, str]]]:
    """Header order plus rows; MOON_FIELDS missing from the header are appended."""
    with path.open("r", newline="") as f:
        reader = csv.DictReader(f)
        rows = list(reader)
        header = list(reader.fieldnames or [])
    return header + [mf for mf in MOON_FIELDS if mf not in header], rows


def write_table(path: Path, header: List[str], rows: List[Dict[str, str]]) -> None:
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=header, restval="", extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)


def main(argv: Optional[List[str]] = None):
    args = sys.argv[1:] if argv is None else argv
    path = Path(args[0]) if args else config.EVENTS_CSV
    if not path.is_file():
        raise SystemExit(f"{path} not found")

    header, rows = read_table(path)
    updated, skipped = annotate_rows(rows, config.DEFAULT_TIMEZONE)
    write_table(path, header, rows)

    print(f"{path}: {updated} rows annotated, {skipped} skipped")


if __name__ == "__main__":
    main()
