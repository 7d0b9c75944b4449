"""timeline-primitives: Interval scheduling core for a single-day block timeline."""

from timeline_primitives.blocks import apply_changes, create_block, update_block
from timeline_primitives.clock import fixed_clock, is_block_in_past, system_clock
from timeline_primitives.controller import TimelineContext, transition
from timeline_primitives.geometry import (
    block_geometry,
    current_time_position,
    is_outside_hours,
)
from timeline_primitives.grid import (
    QUARTER_HOUR,
    TimeGrid,
    snap_minutes_to_grid,
    snap_timestamp_to_grid,
)
from timeline_primitives.layout import compute_layout
from timeline_primitives.overlap import find_overlapping, overlap_map, overlaps
from timeline_primitives.session import TimelineSession
from timeline_primitives.settings import DEFAULT_SETTINGS, TimelineSettings
from timeline_primitives.summary import format_duration, summarize_day
from timeline_primitives.types import (
    Block,
    BlockNotFoundError,
    ColumnAssignment,
    Interval,
    IntervalError,
    TimeError,
)
from timeline_primitives.validation import duration, validate_interval

__all__ = [
    "Block",
    "BlockNotFoundError",
    "ColumnAssignment",
    "DEFAULT_SETTINGS",
    "Interval",
    "IntervalError",
    "QUARTER_HOUR",
    "TimeError",
    "TimeGrid",
    "TimelineContext",
    "TimelineSession",
    "TimelineSettings",
    "apply_changes",
    "block_geometry",
    "compute_layout",
    "create_block",
    "current_time_position",
    "duration",
    "find_overlapping",
    "fixed_clock",
    "format_duration",
    "is_block_in_past",
    "is_outside_hours",
    "overlap_map",
    "overlaps",
    "snap_minutes_to_grid",
    "snap_timestamp_to_grid",
    "summarize_day",
    "system_clock",
    "transition",
    "update_block",
    "validate_interval",
]
