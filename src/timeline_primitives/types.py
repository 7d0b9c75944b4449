"""Shared types: Block, Interval, ColumnAssignment and the error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


@dataclass(frozen=True)
class Interval:
    """Half-open time interval [start, end) on one day.

    ``id`` is None for a candidate that has not been saved yet.
    """

    day_id: str
    start: datetime
    end: datetime
    id: str | None = None

    def shifted(self, minutes: int) -> Interval:
        """Same interval moved by ``minutes`` (both endpoints)."""
        delta = timedelta(minutes=minutes)
        return Interval(self.day_id, self.start + delta, self.end + delta, self.id)


@dataclass(frozen=True)
class Block:
    """Immutable block record as supplied by the storage collaborator.

    Invariants:
        - start < end (zero-length blocks are forbidden)
        - duration == duration(start, end), recomputed on every time update

    Everything except the identifiers and the timestamps is carried through
    untouched.
    """

    id: str
    day_id: str
    title: str
    start: str
    end: str
    duration: int
    status: str = "planned"
    tags: tuple[str, ...] = ()
    type: str = "other"
    priority: str = "medium"
    notes: str | None = None
    color: str | None = None

    def interval(self) -> Interval:
        """Parsed view of this block. Raises IntervalError on bad timestamps."""
        from timeline_primitives.validation import parse_timestamp

        try:
            start = parse_timestamp(self.start)
        except ValueError:
            raise IntervalError(
                TimeError.INVALID_START, self.start, self.end
            ) from None
        try:
            end = parse_timestamp(self.end)
        except ValueError:
            raise IntervalError(
                TimeError.INVALID_END, self.start, self.end
            ) from None
        return Interval(self.day_id, start, end, self.id)


@dataclass(frozen=True)
class ColumnAssignment:
    """Horizontal lane for one block within a layout pass."""

    column: int
    total_columns: int


class TimeError(Enum):
    """Reasons a candidate interval is rejected at the validation boundary."""

    INVALID_START = "invalid_start"
    INVALID_END = "invalid_end"
    START_NOT_BEFORE_END = "start_not_before_end"

    @property
    def message(self) -> str:
        return _TIME_ERROR_MESSAGES[self]


_TIME_ERROR_MESSAGES = {
    TimeError.INVALID_START: "Invalid start time",
    TimeError.INVALID_END: "Invalid end time",
    TimeError.START_NOT_BEFORE_END: "Start time must be before end time",
}


class IntervalError(ValueError):
    """Raised when a block is built or updated with an invalid interval."""

    def __init__(self, error: TimeError, start: object, end: object) -> None:
        self.error = error
        self.start = start
        self.end = end
        super().__init__(f"{error.message}: start={start!r}, end={end!r}")


class BlockNotFoundError(KeyError):
    """Raised when an update names a block id that is not in the pool.

    Signals that the caller's view of the day has drifted from storage.
    """

    def __init__(self, block_id: str) -> None:
        self.block_id = block_id
        super().__init__(block_id)

    def __str__(self) -> str:
        return f"Block with id {self.block_id!r} not found"
