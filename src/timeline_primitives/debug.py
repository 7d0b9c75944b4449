"""ASCII visualisation for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from timeline_primitives.layout import BlockLayout, compute_layout, max_columns
from timeline_primitives.types import Block
from timeline_primitives.validation import minutes_of_day


def show_day(
    blocks: list[Block],
    layout: BlockLayout | None = None,
) -> str:
    """Print ASCII view of one day's layout, one row per column.

    Legend: '.' = free, 'A'-'Z' = block (in input order). Each char is 30
    minutes; a block marks every char it touches. Returns the string and also
    prints to stdout.

    Args:
        blocks: The day's blocks
        layout: Precomputed layout; computed from ``blocks`` when omitted
    """
    if layout is None:
        layout = compute_layout(blocks)

    lines: list[str] = []

    # 24-hour timeline, each char = 30 minutes (48 chars per day)
    chars_per_day = 48
    minutes_per_char = 30

    header_hours = "".join(f"{h:02d}" if h % 3 == 0 else "  " for h in range(24))
    lines.append(f"{'':>8s}  {header_hours}")

    label_chars = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    labels = {
        block.id: label_chars[i % len(label_chars)] for i, block in enumerate(blocks)
    }

    rows = [list("." * chars_per_day) for _ in range(max_columns(layout))]
    for block in blocks:
        iv = block.interval()
        start_min = minutes_of_day(iv.start)
        end_min = start_min + block.duration

        start_char = start_min // minutes_per_char
        end_char = -(-end_min // minutes_per_char)  # ceil

        row = rows[layout[block.id].column]
        for i in range(start_char, min(end_char, chars_per_day)):
            row[i] = labels[block.id]

    for column, row in enumerate(rows):
        lines.append(f"{f'col {column}':>8s}  {''.join(row)}")

    if labels:
        legend_parts = [
            f"{labels[b.id]}={b.title} "
            f"({layout[b.id].column + 1}/{layout[b.id].total_columns})"
            for b in blocks
        ]
        lines.append(f"\nLegend: . = free, {', '.join(legend_parts)}")

    result = "\n".join(lines)
    print(result)
    return result
