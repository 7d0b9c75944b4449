"""Day summary: time planned per block type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from timeline_primitives.types import Block

TYPE_ORDER = ("deep-work", "admin", "meeting", "break", "other")

TYPE_LABELS = {
    "deep-work": "Deep Work",
    "admin": "Admin",
    "meeting": "Meeting",
    "break": "Break",
    "other": "Other",
}


@dataclass(frozen=True)
class DaySummary:
    """Minutes per block type, in display order, plus the day total."""

    type_totals: dict[str, int]
    grand_total: int

    @property
    def is_empty(self) -> bool:
        return self.grand_total == 0 and not self.type_totals


def summarize_day(blocks: Iterable[Block]) -> DaySummary:
    """Total each block type's duration.

    Types with no time are left out. Types outside the known set are listed
    after the known ones, in first-seen order.
    """
    totals: dict[str, int] = {}
    grand_total = 0
    for block in blocks:
        totals[block.type] = totals.get(block.type, 0) + block.duration
        grand_total += block.duration

    ordered = {t: totals[t] for t in TYPE_ORDER if totals.get(t)}
    for block_type, minutes in totals.items():
        if block_type not in ordered and minutes:
            ordered[block_type] = minutes
    return DaySummary(type_totals=ordered, grand_total=grand_total)


def format_duration(minutes: int) -> str:
    """Compact duration label: '0m', '45m', '2h', '1h 15m'."""
    if minutes <= 0:
        return "0m"
    hours, rest = divmod(minutes, 60)
    if hours == 0:
        return f"{rest}m"
    if rest == 0:
        return f"{hours}h"
    return f"{hours}h {rest}m"
