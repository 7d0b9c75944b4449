"""Overlap detection between half-open intervals on the same day."""

from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

from timeline_primitives.types import Block, Interval

T = TypeVar("T", Block, Interval)


def as_interval(item: Block | Interval) -> Interval:
    """Parsed interval for a block, or the interval itself."""
    if isinstance(item, Interval):
        return item
    return item.interval()


def _intersects(a: Interval, b: Interval) -> bool:
    return a.day_id == b.day_id and a.start < b.end and b.start < a.end


def overlaps(a: Block | Interval, b: Block | Interval) -> bool:
    """True if a and b share a day, are distinct blocks, and intersect.

    Adjacent intervals (a.end == b.start) do not overlap. Comparing a block
    with itself, or blocks on different days, is always False.
    """
    ia = as_interval(a)
    ib = as_interval(b)
    if ia.id is not None and ia.id == ib.id:
        return False
    return _intersects(ia, ib)


def find_overlapping(candidate: Block | Interval, pool: Sequence[T]) -> list[T]:
    """Every pool member overlapping ``candidate``, in pool order.

    The candidate itself is skipped by id when it has one; an unsaved
    candidate (id None) is checked against the whole pool.
    """
    target = as_interval(candidate)
    result: list[T] = []
    for item in pool:
        other = as_interval(item)
        if target.id is not None and other.id == target.id:
            continue
        if _intersects(target, other):
            result.append(item)
    return result


def overlap_map(blocks: Iterable[Block]) -> dict[str, list[str]]:
    """Map each block id to the ids of the blocks it overlaps."""
    pool = list(blocks)
    return {
        block.id: [other.id for other in find_overlapping(block, pool)]
        for block in pool
    }
