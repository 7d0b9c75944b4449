"""Injected "now": past-block checks without reading the wall clock directly."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime

from timeline_primitives.types import Block

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Local wall-clock time, naive like every other datetime in the library."""
    return datetime.now()


def fixed_clock(instant: datetime) -> Clock:
    """A clock frozen at ``instant``, for tests and replays."""

    def now() -> datetime:
        return instant

    return now


def is_block_in_past(block: Block, day: date, now: datetime) -> bool:
    """Whether a block is over and should be shown read-only.

    Every block on a day before today is past. On today, a block is past once
    its end has gone by. Blocks on future days never are.
    """
    today = now.date()
    if day < today:
        return True
    if day == today:
        return now > block.interval().end
    return False
