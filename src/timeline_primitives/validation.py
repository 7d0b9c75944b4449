"""Timestamp parsing, duration arithmetic and interval validation."""

from __future__ import annotations

from datetime import datetime, timedelta

from timeline_primitives.types import TimeError

_ONE_MINUTE = timedelta(minutes=1)


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO-8601 timestamp into a naive wall-clock datetime.

    Date-only strings parse as midnight. An offset suffix ('Z', '+02:00') is
    accepted and dropped: all times are local to the day being planned.

    Raises ValueError if the value does not parse.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.strip())
    else:
        raise ValueError(f"expected ISO timestamp string, got {value!r}")
    if dt.tzinfo is not None:
        dt = dt.replace(tzinfo=None)
    return dt


def format_timestamp(dt: datetime) -> str:
    """Format a datetime the way the core writes timestamps back."""
    return dt.replace(tzinfo=None).isoformat(timespec="seconds")


def minutes_of_day(dt: datetime) -> int:
    """Minutes since midnight, ignoring seconds."""
    return dt.hour * 60 + dt.minute


def duration(start: str | datetime, end: str | datetime) -> int:
    """Whole minutes from start to end, truncated toward zero.

    Negative when end precedes start; callers validate first.
    """
    delta = parse_timestamp(end) - parse_timestamp(start)
    minutes = abs(delta) // _ONE_MINUTE
    return -minutes if delta < timedelta(0) else minutes


def validate_interval(
    start: str | datetime, end: str | datetime
) -> TimeError | None:
    """Validate a candidate interval. Returns None when valid.

    Checks, in order:
    - start parses
    - end parses
    - start is strictly before end
    """
    try:
        start_dt = parse_timestamp(start)
    except (ValueError, TypeError):
        return TimeError.INVALID_START
    try:
        end_dt = parse_timestamp(end)
    except (ValueError, TypeError):
        return TimeError.INVALID_END
    if start_dt >= end_dt:
        return TimeError.START_NOT_BEFORE_END
    return None
