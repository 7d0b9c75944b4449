"""Pixel geometry handed to the rendering collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time

from timeline_primitives.settings import DEFAULT_SETTINGS, TimelineSettings
from timeline_primitives.types import Block, ColumnAssignment
from timeline_primitives.validation import minutes_of_day


@dataclass(frozen=True)
class BlockGeometry:
    """Position of one block card. Vertical values in pixels, horizontal in percent."""

    top: float
    height: float
    left: float
    width: float


def block_geometry(
    block: Block,
    assignment: ColumnAssignment,
    settings: TimelineSettings = DEFAULT_SETTINGS,
) -> BlockGeometry:
    """Card position from the block's times and its layout column.

    top    = (start_minutes - window_start) / 60 * pixels_per_hour
    height = duration / 60 * pixels_per_hour
    width  = 100 / total_columns
    left   = width * column
    """
    iv = block.interval()
    pph = settings.pixels_per_hour
    start_minutes = minutes_of_day(iv.start)
    top = (start_minutes - settings.window_start_minutes) / 60 * pph
    height = block.duration / 60 * pph
    width = 100.0 / assignment.total_columns
    return BlockGeometry(
        top=top,
        height=height,
        left=width * assignment.column,
        width=width,
    )


def is_outside_hours(
    block: Block, settings: TimelineSettings = DEFAULT_SETTINGS
) -> bool:
    """True if the block starts before or ends after the visible window."""
    iv = block.interval()
    day = iv.start.date()
    window_start = datetime.combine(day, time(settings.start_hour))
    window_end = datetime.combine(day, time(settings.end_hour))
    return iv.start < window_start or iv.end > window_end


def current_time_position(
    now: datetime,
    day: date,
    settings: TimelineSettings = DEFAULT_SETTINGS,
) -> float | None:
    """Pixel offset of the "now" line, or None when it should not be drawn.

    Only drawn on the day being viewed and within the visible window.
    """
    if now.date() != day:
        return None
    minutes = minutes_of_day(now)
    if minutes < settings.window_start_minutes or minutes > settings.window_end_minutes:
        return None
    return (minutes - settings.window_start_minutes) / 60 * settings.pixels_per_hour
