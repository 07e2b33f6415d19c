# config.py
"""
Runtime settings. Each one can be overridden from the environment.
"""

from __future__ import annotations

import os
from pathlib import Path

# Zone used when a caller does not name one
DEFAULT_TIMEZONE = os.environ.get("LUNAR_PHASES_TIMEZONE", "Australia/Brisbane")

# Bundled phase table (USNO-style, minute precision)
DATA_PATH = Path(
    os.environ.get("LUNAR_PHASES_DATA")
    or Path(__file__).with_name("data") / "phases.csv"
)

# Default input of `python -m lunar_phases.annotate`
EVENTS_CSV = Path(os.environ.get("EVENTS_CSV", "events.csv"))
