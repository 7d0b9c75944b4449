"""Column layout: greedy interval-graph colouring of one day's blocks.

Overlapping blocks are placed in side-by-side columns. Blocks are scanned in
start order and each takes the lowest column not held by a block that is
still running, which never uses more columns than the largest set of blocks
running at one instant. Every block in a cluster (blocks connected through
pairwise overlap) reports the same width, the cluster's highest column + 1.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Iterable, Mapping

from timeline_primitives.types import Block, ColumnAssignment, Interval

BlockLayout = Mapping[str, ColumnAssignment]


@dataclass
class _Occupant:
    """A block holding a column until ``end``."""

    index: int
    column: int
    end: datetime


class _Clusters:
    """Union-find over arena indices."""

    def __init__(self, size: int) -> None:
        self._parent = list(range(size))

    def find(self, i: int) -> int:
        root = i
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[i] != root:
            self._parent[i], i = root, self._parent[i]
        return root

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            self._parent[rb] = ra


def _sort_key(item: tuple[int, Interval]):
    """Start ascending, longer block first, then input order."""
    index, iv = item
    return (iv.start, -(iv.end - iv.start), index)


def _assign_columns(intervals: list[Interval]) -> list[ColumnAssignment]:
    """Columns and widths for intervals that all belong to one day.

    Returns assignments in the same order as the input.
    """
    count = len(intervals)
    columns = [0] * count
    clusters = _Clusters(count)
    active: list[_Occupant] = []

    for index, iv in sorted(enumerate(intervals), key=_sort_key):
        # Columns whose occupant ended at or before this start are free again.
        active = [occ for occ in active if occ.end > iv.start]

        in_use = {occ.column for occ in active}
        column = 0
        while column in in_use:
            column += 1
        columns[index] = column

        # Every remaining occupant started no later and ends after this start.
        for occ in active:
            clusters.union(occ.index, index)
        active.append(_Occupant(index=index, column=column, end=iv.end))

    widest: dict[int, int] = defaultdict(int)
    for index in range(count):
        root = clusters.find(index)
        widest[root] = max(widest[root], columns[index] + 1)

    return [
        ColumnAssignment(column=columns[i], total_columns=widest[clusters.find(i)])
        for i in range(count)
    ]


def compute_layout(blocks: Iterable[Block | Interval]) -> BlockLayout:
    """Assign each block a (column, total_columns) pair.

    Pure function of the block set: a fresh read-only mapping keyed by block
    id is returned on every call. Blocks from different days are laid out
    independently. An empty input gives an empty mapping.

    Raises:
        IntervalError: If a block's timestamps do not parse.
        ValueError: If an interval has no id, or two share one.
    """
    by_day: dict[str, list[Interval]] = defaultdict(list)
    seen: set[str] = set()
    for item in blocks:
        iv = item if isinstance(item, Interval) else item.interval()
        if iv.id is None:
            raise ValueError(f"cannot lay out an interval without an id: {iv!r}")
        if iv.id in seen:
            raise ValueError(f"duplicate block id in layout input: {iv.id!r}")
        seen.add(iv.id)
        by_day[iv.day_id].append(iv)

    result: dict[str, ColumnAssignment] = {}
    for intervals in by_day.values():
        for iv, assignment in zip(intervals, _assign_columns(intervals)):
            result[iv.id] = assignment
    return MappingProxyType(result)


def max_columns(layout: BlockLayout) -> int:
    """Widest cluster in a layout (0 for an empty day)."""
    return max((a.total_columns for a in layout.values()), default=0)
