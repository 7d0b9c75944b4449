"""TimelineSession: runs the controller against a day's block pool.

The session keeps the current controller state and a local copy of the day's
blocks, applies each effect to that copy and forwards it to the storage
collaborator. It is the only stateful piece of the library.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import timedelta
from typing import Iterable, Protocol

from timeline_primitives.blocks import create_block, index_blocks, update_block
from timeline_primitives.controller import (
    BlockDeleted,
    DeleteRequested,
    Dragging,
    Effect,
    Event,
    FieldsChanged,
    Idle,
    IntervalChanged,
    Resizing,
    Selected,
    State,
    TimelineContext,
    transition,
)
from timeline_primitives.layout import BlockLayout, compute_layout
from timeline_primitives.overlap import find_overlapping
from timeline_primitives.types import Block, BlockNotFoundError
from timeline_primitives.validation import format_timestamp

logger = logging.getLogger(__name__)

NEW_BLOCK_MINUTES = 60


class BlockStore(Protocol):
    """The storage collaborator. The session never reads from it."""

    def create_block(self, block: Block) -> None: ...

    def update_block(self, block_id: str, changes: dict[str, object]) -> None: ...

    def delete_block(self, block_id: str) -> None: ...


class TimelineSession:
    """One day's timeline being edited."""

    def __init__(
        self,
        day_id: str,
        blocks: Iterable[Block],
        context: TimelineContext,
        store: BlockStore,
    ) -> None:
        self.day_id = day_id
        self.context = context
        self.state: State = Idle()
        self._store = store
        self._blocks = index_blocks(blocks)

    @property
    def blocks(self) -> list[Block]:
        return list(self._blocks.values())

    def get(self, block_id: str) -> Block:
        try:
            return self._blocks[block_id]
        except KeyError:
            raise BlockNotFoundError(block_id) from None

    def layout(self) -> BlockLayout:
        return compute_layout(self._blocks.values())

    def conflicts(self, block_id: str) -> list[Block]:
        """Blocks overlapping ``block_id``, in pool order."""
        return find_overlapping(self.get(block_id), self.blocks)

    def dispatch(self, event: Event) -> tuple[Effect, ...]:
        """Feed one event through the controller and apply its effects."""
        state, effects = transition(self.state, event, self.context)
        for effect in effects:
            self._apply(effect)
        if type(state) is not type(self.state):
            logger.debug(
                "%s -> %s on %s",
                type(self.state).__name__,
                type(state).__name__,
                type(event).__name__,
            )
        self.state = state
        return effects

    def _apply(self, effect: Effect) -> None:
        if isinstance(effect, IntervalChanged):
            updated = update_block(
                self._blocks,
                effect.block_id,
                {"start": effect.start, "end": effect.end},
            )
            self._blocks[updated.id] = updated
            self._store.update_block(effect.block_id, effect.changes)
            logger.debug(
                "block %s moved to %s - %s (%d min)",
                effect.block_id,
                effect.start,
                effect.end,
                effect.duration,
            )
        elif isinstance(effect, FieldsChanged):
            updated = update_block(self._blocks, effect.block_id, effect.changes)
            self._blocks[updated.id] = updated
            self._store.update_block(effect.block_id, dict(effect.changes))
        elif isinstance(effect, DeleteRequested):
            if effect.block_id not in self._blocks:
                raise BlockNotFoundError(effect.block_id)
            del self._blocks[effect.block_id]
            self._store.delete_block(effect.block_id)
        else:
            raise TypeError(f"unknown effect: {effect!r}")

    def replace_blocks(self, blocks: Iterable[Block]) -> None:
        """Take a fresh copy of the day from storage.

        If the block held by the controller is gone, the controller returns
        to Idle. If it survived, the controller picks up the stored version;
        a drag or resize in progress ends in Selected, since its origin no
        longer matches storage.
        """
        self._blocks = index_blocks(blocks)
        held = getattr(self.state, "block", None)
        if held is None:
            return
        if held.id not in self._blocks:
            self.dispatch(BlockDeleted(held.id))
            return

        fresh = self._blocks[held.id]
        if isinstance(self.state, (Dragging, Resizing)):
            logger.debug("block %s changed in storage mid-gesture", held.id)
            self.state = Selected(fresh)
        else:
            self.state = replace(self.state, block=fresh)

    def create_at(self, y: float, title: str = "New Block") -> Block | None:
        """Create a one-hour block where the timeline was clicked.

        ``y`` is measured in pixels from the top of the visible window. The
        start snaps to the grid. Nothing is created while a block is selected
        or being edited, or when the block would run past midnight.
        """
        if not isinstance(self.state, Idle):
            return None

        settings = self.context.settings
        clicked = math.floor(y / settings.pixels_per_hour * 60)
        minutes = settings.grid.snap_minutes(clicked) + settings.window_start_minutes
        start = self.context.day_start + timedelta(minutes=minutes)
        end = start + timedelta(minutes=NEW_BLOCK_MINUTES)
        if start < self.context.day_start or end > self.context.day_end:
            logger.debug("create rejected: %s - %s leaves the day", start, end)
            return None

        block = create_block(
            self.day_id,
            title,
            format_timestamp(start),
            format_timestamp(end),
        )
        self._blocks[block.id] = block
        self._store.create_block(block)
        return block
