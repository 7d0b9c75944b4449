"""Block construction and updates at the validation boundary.

The storage collaborator owns persistence. These helpers build the records it
stores: they validate intervals, derive ``duration`` and apply defaults, the
same way for a brand-new block and for an update to an existing one.
"""

from __future__ import annotations

import dataclasses
import uuid
from typing import Any, Iterable, Mapping

from timeline_primitives.types import Block, BlockNotFoundError, IntervalError
from timeline_primitives.validation import duration, validate_interval

# Fields a caller may change. ``id``, ``day_id`` and ``duration`` are not
# among them: duration is always derived from start/end.
UPDATABLE_FIELDS = frozenset(
    {"title", "notes", "start", "end", "status", "tags", "type", "priority", "color"}
)


def new_block_id() -> str:
    return uuid.uuid4().hex


def create_block(
    day_id: str,
    title: str,
    start: str,
    end: str,
    *,
    block_id: str | None = None,
    status: str = "planned",
    tags: Iterable[str] = (),
    type: str = "other",
    priority: str = "medium",
    notes: str | None = None,
    color: str | None = None,
) -> Block:
    """Build a new block record. Raises IntervalError for a bad interval."""
    error = validate_interval(start, end)
    if error is not None:
        raise IntervalError(error, start, end)

    return Block(
        id=block_id if block_id is not None else new_block_id(),
        day_id=day_id,
        title=title,
        start=start,
        end=end,
        duration=duration(start, end),
        status=status,
        tags=tuple(tags),
        type=type,
        priority=priority,
        notes=notes,
        color=color,
    )


def apply_changes(block: Block, changes: Mapping[str, Any]) -> Block:
    """Return ``block`` with ``changes`` applied.

    When start or end change the interval is revalidated and duration is
    recomputed.

    Raises:
        ValueError: If a change names a field that cannot be updated.
        IntervalError: If the resulting interval is invalid.
    """
    unknown = sorted(set(changes) - UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"cannot update field(s): {', '.join(unknown)}")

    updates = dict(changes)
    if "tags" in updates:
        updates["tags"] = tuple(updates["tags"])

    updated = dataclasses.replace(block, **updates)
    if "start" in changes or "end" in changes:
        error = validate_interval(updated.start, updated.end)
        if error is not None:
            raise IntervalError(error, updated.start, updated.end)
        updated = dataclasses.replace(
            updated, duration=duration(updated.start, updated.end)
        )
    return updated


def update_block(
    pool: Mapping[str, Block], block_id: str, changes: Mapping[str, Any]
) -> Block:
    """Look up ``block_id`` in ``pool`` and apply ``changes``.

    Raises BlockNotFoundError if the id is not in the pool.
    """
    try:
        existing = pool[block_id]
    except KeyError:
        raise BlockNotFoundError(block_id) from None
    return apply_changes(existing, changes)


def index_blocks(blocks: Iterable[Block]) -> dict[str, Block]:
    """Pool keyed by id, keeping input order."""
    return {block.id: block for block in blocks}
