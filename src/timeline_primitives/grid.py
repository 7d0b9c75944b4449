"""Boundary: TimeGrid, snapping minutes and timestamps to a fixed grid."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Always returns a plain int, so there is no negative zero.
    """
    magnitude = int(abs(value) + 0.5)
    return -magnitude if value < 0 else magnitude


def snap_minutes_to_grid(minutes: int, grid_size: int = 15) -> int:
    """Round ``minutes`` to the nearest multiple of ``grid_size``.

    Used both for absolute minute-of-day values and for relative drag deltas.
    Exact halves round away from zero (with an even grid, 15 of 30 -> 30 and
    -15 of 30 -> -30). Idempotent.

    >>> snap_minutes_to_grid(37)
    30
    >>> snap_minutes_to_grid(-7)
    0
    """
    if grid_size <= 0:
        raise ValueError(f"grid_size must be positive, got {grid_size}")
    steps, remainder = divmod(abs(minutes), grid_size)
    if 2 * remainder >= grid_size:
        steps += 1
    snapped = steps * grid_size
    return -snapped if minutes < 0 else snapped


def snap_timestamp_to_grid(ts: datetime, grid_size: int = 15) -> datetime:
    """Snap the minute component of ``ts`` to the nearest grid line.

    Seconds and microseconds are zeroed and do not take part in rounding.
    Snapping :53 on a 15-minute grid rolls over into the next hour.
    """
    hour_start = ts.replace(minute=0, second=0, microsecond=0)
    return hour_start + timedelta(minutes=snap_minutes_to_grid(ts.minute, grid_size))


@dataclass(frozen=True)
class TimeGrid:
    """Snapping granularity for block times. Immutable.

    The grid is set once by configuration; drag, resize and click-to-create
    all snap through the same instance.
    """

    minutes: int
    label: str

    def snap_minutes(self, minutes: int) -> int:
        """Nearest multiple of the grid size (halves away from zero)."""
        return snap_minutes_to_grid(minutes, self.minutes)

    def snap_timestamp(self, ts: datetime) -> datetime:
        """Nearest grid line for the minute component of ``ts``."""
        return snap_timestamp_to_grid(ts, self.minutes)

    def is_aligned(self, ts: datetime) -> bool:
        """True if ``ts`` already sits exactly on a grid line."""
        return (
            ts.second == 0
            and ts.microsecond == 0
            and ts.minute % self.minutes == 0
        )


QUARTER_HOUR = TimeGrid(minutes=15, label="quarter-hour")
HALF_HOUR = TimeGrid(minutes=30, label="half-hour")
