# catalog.py
"""
Select-box friendly listings of the phases, and the legacy integer ids.

Legacy ids are positions in `detailed_collection()`:

    id = 9 * kind_position + (offset + 4)      # offset in -4..+4

so 0 is "New Moon-4", 4 is "New Moon", 22 is "Full Moon" and 35 is
"3rd Quarter+4". Consumers store these integers; neither the kind order nor
the offset order may change.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .phase import PHASE_NAMES, PhaseKind, format_name

OFFSETS = range(-4, 5)


def collection() -> List[Tuple[str, PhaseKind]]:
    return [(PHASE_NAMES[kind], kind) for kind in PhaseKind]


def detailed_collection() -> List[Tuple[str, str]]:
    """All 36 kind/offset pairs as (name, "kind:offset"), e.g. ("Full Moon+2", "full_moon:2")."""
    return [
        (format_name(PHASE_NAMES[kind], offset), f"{kind.value}:{offset}")
        for kind in PhaseKind
        for offset in OFFSETS
    ]


def legacy_id(kind: PhaseKind, offset: int) -> int:
    if offset not in OFFSETS:
        raise ValueError(f"offset must be within -4..4, got {offset}")
    return len(OFFSETS) * kind.position + (offset - OFFSETS.start)


def legacy_id_lookup(legacy: object) -> Optional[str]:
    """Display name for a legacy id, or None when the id is not in the table."""
    if isinstance(legacy, bool) or not isinstance(legacy, int):
        return None
    entries = detailed_collection()
    if not 0 <= legacy < len(entries):
        return None
    return entries[legacy][0]
