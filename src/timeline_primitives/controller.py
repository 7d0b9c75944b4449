"""Interaction controller: select / drag / resize / keyboard / edit.

An explicit state machine. ``transition(state, event, context)`` is pure: it
returns the next state and a tuple of effects for the storage collaborator
and never mutates its inputs. Proposed changes that break a rule (leaving the
day, collapsing a block, no actual change) are dropped silently: the state
comes back unchanged with no effects.

Drag and resize always compute from the interval captured when the gesture
began, never from the last intermediate position, so replaying the same
pointer position gives the same result and rounding never accumulates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta
from typing import Mapping, Union

from timeline_primitives.blocks import apply_changes
from timeline_primitives.clock import Clock, is_block_in_past, system_clock
from timeline_primitives.grid import round_half_away
from timeline_primitives.settings import DEFAULT_SETTINGS, TimelineSettings
from timeline_primitives.types import Block, Interval
from timeline_primitives.validation import format_timestamp

logger = logging.getLogger(__name__)

TOP = "top"
BOTTOM = "bottom"
HANDLES = (TOP, BOTTOM)

EDITABLE_DRAFT_FIELDS = ("title", "notes", "tags", "status", "type")


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Idle:
    """Nothing selected."""


@dataclass(frozen=True)
class Selected:
    block: Block


@dataclass(frozen=True)
class Dragging:
    """Moving a whole block. ``block`` holds the last accepted position."""

    block: Block
    anchor_y: float
    original: Interval


@dataclass(frozen=True)
class Resizing:
    """Moving one edge of a block while the other stays put."""

    block: Block
    handle: str
    anchor_y: float
    original: Interval


@dataclass(frozen=True)
class BlockDraft:
    """Editable copy of a block's descriptive fields.

    ``tags`` is the comma-separated text shown in the form.
    """

    title: str
    notes: str
    tags: str
    status: str
    type: str

    @classmethod
    def from_block(cls, block: Block) -> BlockDraft:
        return cls(
            title=block.title,
            notes=block.notes or "",
            tags=", ".join(block.tags),
            status=block.status,
            type=block.type,
        )

    def tag_list(self) -> tuple[str, ...]:
        """Tags split on commas, trimmed, empty entries dropped."""
        return tuple(t.strip() for t in self.tags.split(",") if t.strip())

    def changes(self) -> dict[str, object]:
        """Field updates this draft commits."""
        return {
            "title": self.title,
            "notes": self.notes or None,
            "tags": self.tag_list(),
            "status": self.status,
            "type": self.type,
        }


@dataclass(frozen=True)
class Editing:
    block: Block
    draft: BlockDraft


State = Union[Idle, Selected, Dragging, Resizing, Editing]


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Select:
    block: Block
    read_only: bool = False


@dataclass(frozen=True)
class BeginDrag:
    y: float


@dataclass(frozen=True)
class BeginResize:
    handle: str
    y: float


@dataclass(frozen=True)
class PointerMove:
    y: float


@dataclass(frozen=True)
class PointerRelease:
    pass


@dataclass(frozen=True)
class KeyPress:
    key: str
    shift: bool = False


@dataclass(frozen=True)
class StartEdit:
    pass


@dataclass(frozen=True)
class EditDraft:
    """Set one draft field, e.g. EditDraft("tags", "focus, writing")."""

    name: str
    value: str


@dataclass(frozen=True)
class SaveEdit:
    pass


@dataclass(frozen=True)
class CancelEdit:
    pass


@dataclass(frozen=True)
class Deselect:
    pass


@dataclass(frozen=True)
class BlockDeleted:
    """The storage collaborator removed a block."""

    block_id: str


Event = Union[
    Select,
    BeginDrag,
    BeginResize,
    PointerMove,
    PointerRelease,
    KeyPress,
    StartEdit,
    EditDraft,
    SaveEdit,
    CancelEdit,
    Deselect,
    BlockDeleted,
]


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class IntervalChanged:
    """Accepted move or resize. ``duration`` is already recomputed."""

    block_id: str
    start: str
    end: str
    duration: int

    @property
    def changes(self) -> dict[str, object]:
        return {"start": self.start, "end": self.end, "duration": self.duration}


@dataclass(frozen=True)
class FieldsChanged:
    block_id: str
    changes: Mapping[str, object]


@dataclass(frozen=True)
class DeleteRequested:
    block_id: str


Effect = Union[IntervalChanged, FieldsChanged, DeleteRequested]

_NO_EFFECTS: tuple[Effect, ...] = ()


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TimelineContext:
    """What the controller needs to know about the timeline being edited."""

    day: date
    settings: TimelineSettings = DEFAULT_SETTINGS
    clock: Clock = field(default=system_clock, compare=False)

    @property
    def day_start(self) -> datetime:
        return datetime.combine(self.day, time(0, 0))

    @property
    def day_end(self) -> datetime:
        """Midnight at the end of the day (24:00)."""
        return self.day_start + timedelta(days=1)

    def within_day(self, iv: Interval) -> bool:
        return self.day_start <= iv.start and iv.end <= self.day_end

    def pixels_to_minutes(self, pixel_delta: float) -> int:
        """Pointer travel converted to a grid-snapped minute delta.

        Rounds halves away from zero, so an upward drag snaps exactly like the
        same downward one (-7.5 min -> -8 -> -15, mirroring 7.5 -> 8 -> 15).
        """
        raw = round_half_away(pixel_delta / self.settings.pixels_per_hour * 60)
        return self.settings.grid.snap_minutes(raw)


# ---------------------------------------------------------------------------
# Transition
# ---------------------------------------------------------------------------
def transition(
    state: State, event: Event, context: TimelineContext
) -> tuple[State, tuple[Effect, ...]]:
    """Next state and effects for ``event``. Pure; never raises for rejections."""
    if isinstance(event, Deselect):
        return Idle(), _NO_EFFECTS

    if isinstance(event, BlockDeleted):
        held = getattr(state, "block", None)
        if held is not None and held.id == event.block_id:
            return Idle(), _NO_EFFECTS
        return state, _NO_EFFECTS

    if isinstance(state, Idle):
        return _from_idle(state, event, context)
    if isinstance(state, Selected):
        return _from_selected(state, event, context)
    if isinstance(state, Dragging):
        return _from_dragging(state, event, context)
    if isinstance(state, Resizing):
        return _from_resizing(state, event, context)
    if isinstance(state, Editing):
        return _from_editing(state, event, context)
    raise TypeError(f"unknown controller state: {state!r}")


def _select(
    state: State, event: Select, context: TimelineContext
) -> tuple[State, tuple[Effect, ...]]:
    if event.read_only:
        logger.debug("select rejected: block %s is read-only", event.block.id)
        return state, _NO_EFFECTS
    if is_block_in_past(event.block, context.day, context.clock()):
        logger.debug("select rejected: block %s is in the past", event.block.id)
        return state, _NO_EFFECTS
    return Selected(event.block), _NO_EFFECTS


def _from_idle(
    state: Idle, event: Event, context: TimelineContext
) -> tuple[State, tuple[Effect, ...]]:
    if isinstance(event, Select):
        return _select(state, event, context)
    return state, _NO_EFFECTS


def _from_selected(
    state: Selected, event: Event, context: TimelineContext
) -> tuple[State, tuple[Effect, ...]]:
    block = state.block

    if isinstance(event, Select):
        return _select(state, event, context)

    if isinstance(event, BeginDrag):
        return Dragging(block, event.y, block.interval()), _NO_EFFECTS

    if isinstance(event, BeginResize):
        if event.handle not in HANDLES:
            raise ValueError(
                f"resize handle must be one of {HANDLES}, got {event.handle!r}"
            )
        return Resizing(block, event.handle, event.y, block.interval()), _NO_EFFECTS

    if isinstance(event, StartEdit):
        return Editing(block, BlockDraft.from_block(block)), _NO_EFFECTS

    if isinstance(event, KeyPress):
        return _on_key(state, event, context)

    return state, _NO_EFFECTS


def _on_key(
    state: Selected, event: KeyPress, context: TimelineContext
) -> tuple[State, tuple[Effect, ...]]:
    block = state.block
    settings = context.settings
    step = (
        settings.keyboard_large_step_minutes
        if event.shift
        else settings.keyboard_step_minutes
    )
    key = event.key

    if key in ("ArrowUp", "ArrowDown"):
        minutes = -step if key == "ArrowUp" else step
        proposed = block.interval().shifted(minutes)
        return _propose(state, proposed, context)

    if key in ("ArrowLeft", "ArrowRight"):
        current = block.interval()
        minutes = -step if key == "ArrowLeft" else step
        proposed = replace(current, end=current.end + timedelta(minutes=minutes))
        if proposed.end <= proposed.start:
            logger.debug("shrink rejected: block %s would collapse", block.id)
            return state, _NO_EFFECTS
        return _propose(state, proposed, context)

    if key in ("Enter", "e"):
        return Editing(block, BlockDraft.from_block(block)), _NO_EFFECTS

    if key == "Escape":
        return Idle(), _NO_EFFECTS

    if key in ("Delete", "Backspace"):
        return Idle(), (DeleteRequested(block.id),)

    return state, _NO_EFFECTS


def _propose(
    state: Selected | Dragging | Resizing,
    proposed: Interval,
    context: TimelineContext,
) -> tuple[State, tuple[Effect, ...]]:
    """Accept ``proposed`` for the held block, or return ``state`` unchanged."""
    block = state.block
    if not context.within_day(proposed):
        logger.debug(
            "change rejected: block %s would leave the day (%s - %s)",
            block.id,
            proposed.start,
            proposed.end,
        )
        return state, _NO_EFFECTS

    current = block.interval()
    if proposed.start == current.start and proposed.end == current.end:
        return state, _NO_EFFECTS

    updated = apply_changes(
        block,
        {
            "start": format_timestamp(proposed.start),
            "end": format_timestamp(proposed.end),
        },
    )
    effect = IntervalChanged(
        block_id=updated.id,
        start=updated.start,
        end=updated.end,
        duration=updated.duration,
    )
    return replace(state, block=updated), (effect,)


def _from_dragging(
    state: Dragging, event: Event, context: TimelineContext
) -> tuple[State, tuple[Effect, ...]]:
    if isinstance(event, PointerMove):
        minutes = context.pixels_to_minutes(event.y - state.anchor_y)
        return _propose(state, state.original.shifted(minutes), context)

    if isinstance(event, PointerRelease):
        return Selected(state.block), _NO_EFFECTS

    if isinstance(event, KeyPress) and event.key == "Escape":
        return Idle(), _NO_EFFECTS

    return state, _NO_EFFECTS


def _from_resizing(
    state: Resizing, event: Event, context: TimelineContext
) -> tuple[State, tuple[Effect, ...]]:
    if isinstance(event, PointerMove):
        minutes = context.pixels_to_minutes(event.y - state.anchor_y)
        delta = timedelta(minutes=minutes)
        original = state.original
        if state.handle == TOP:
            proposed = replace(original, start=original.start + delta)
        else:
            proposed = replace(original, end=original.end + delta)
        if proposed.start >= proposed.end:
            logger.debug(
                "resize rejected: %s edge of block %s would cross the other edge",
                state.handle,
                state.block.id,
            )
            return state, _NO_EFFECTS
        return _propose(state, proposed, context)

    if isinstance(event, PointerRelease):
        return Selected(state.block), _NO_EFFECTS

    if isinstance(event, KeyPress) and event.key == "Escape":
        return Idle(), _NO_EFFECTS

    return state, _NO_EFFECTS


def _from_editing(
    state: Editing, event: Event, context: TimelineContext
) -> tuple[State, tuple[Effect, ...]]:
    if isinstance(event, EditDraft):
        if event.name not in EDITABLE_DRAFT_FIELDS:
            raise ValueError(f"not an editable field: {event.name!r}")
        draft = replace(state.draft, **{event.name: event.value})
        return replace(state, draft=draft), _NO_EFFECTS

    if isinstance(event, SaveEdit):
        changes = state.draft.changes()
        updated = apply_changes(state.block, changes)
        return Selected(updated), (FieldsChanged(updated.id, changes),)

    if isinstance(event, CancelEdit):
        return Selected(state.block), _NO_EFFECTS

    if isinstance(event, KeyPress) and event.key == "Escape":
        return Idle(), _NO_EFFECTS

    return state, _NO_EFFECTS
