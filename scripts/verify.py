#!/usr/bin/env python
"""Visual verification report for timeline-primitives.

Run:  uv run python scripts/verify.py

Produces a formatted report showing:
  1. Reference data and the settings fixture
  2. Grid snapping  -- input/output table
  3. Column layout scenarios  -- expected vs computed, plus ASCII day view
  4. The sample day  -- layout, conflicts, pixel geometry and type totals
"""

from __future__ import annotations

import json
import sys
from datetime import date, datetime
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths and data loading
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
FIXTURES = ROOT / "data" / "fixtures"
SCENARIOS = FIXTURES / "scenarios"

sys.path.insert(0, str(ROOT / "src"))

from timeline_primitives.blocks import create_block
from timeline_primitives.debug import show_day
from timeline_primitives.geometry import block_geometry, is_outside_hours
from timeline_primitives.grid import snap_minutes_to_grid, snap_timestamp_to_grid
from timeline_primitives.layout import compute_layout
from timeline_primitives.loaders import load_day_json, load_settings_json
from timeline_primitives.overlap import overlap_map
from timeline_primitives.summary import TYPE_LABELS, format_duration, summarize_day
from timeline_primitives.validation import parse_timestamp


def _load(path: Path):
    with open(path) as f:
        return json.load(f)


_ref = _load(FIXTURES / "reference.json")

DAY_ID = _ref["day_id"]
DAY = date.fromisoformat(_ref["date"])

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
WIDTH = 90


def banner(title: str):
    print()
    print("=" * WIDTH)
    print(f"  {title}")
    print("=" * WIDTH)


def heading(title: str):
    print()
    print(f"  {title}")
    print(f"  {'-' * (len(title) + 2)}")


def table(headers: list[str], rows: list[list[str]], indent: int = 4):
    """Print a formatted table with auto-sized columns."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    pad = " " * indent
    fmt = pad + "  ".join(f"{{:<{w}}}" for w in col_widths)
    sep = pad + "  ".join("-" * w for w in col_widths)

    print(fmt.format(*headers))
    print(sep)
    for row in rows:
        padded = row + [""] * (len(headers) - len(row))
        print(fmt.format(*padded))


def _hhmm(iso: str) -> str:
    return parse_timestamp(iso).strftime("%H:%M")


def _scenario_blocks(rows: list[list[str]]):
    blocks = []
    for row in rows:
        block_id, start, end = row[:3]
        day_id = row[3] if len(row) > 3 else DAY_ID
        blocks.append(create_block(
            day_id, block_id,
            f"{DAY.isoformat()}T{start}:00", f"{DAY.isoformat()}T{end}:00",
            block_id=block_id,
        ))
    return blocks


# ---------------------------------------------------------------------------
# Section 1: Reference Data
# ---------------------------------------------------------------------------
def section_reference():
    banner("REFERENCE DATA")
    print(f"\n    Day:            {DAY_ID} ({DAY.strftime('%A %Y-%m-%d')})")
    print(f"    Now:            {_ref['now']}")
    print(f"    Scale:          {_ref['pixels_per_hour']} px/hour")
    print(f"    Grid:           {_ref['grid_minutes']} min")

    heading("Settings Fixture")
    settings = load_settings_json(FIXTURES / "settings.json")
    rows = [[key, str(value)] for key, value in settings.to_dict().items()]
    table(["Setting", "Value"], rows)


# ---------------------------------------------------------------------------
# Section 2: Grid Snapping
# ---------------------------------------------------------------------------
def section_snap():
    banner("GRID SNAPPING (15 min)")
    data = _load(SCENARIOS / "snap.json")

    heading("Minute Deltas")
    rows = []
    for minutes, expected in data["minutes"]:
        got = snap_minutes_to_grid(minutes)
        rows.append([str(minutes), str(expected), str(got),
                     "ok" if got == expected else "MISMATCH"])
    table(["Input", "Expected", "Got", ""], rows)

    heading("Timestamps")
    rows = []
    for raw, expected in data["timestamps"]:
        got = snap_timestamp_to_grid(datetime.fromisoformat(raw))
        rows.append([raw, expected, got.isoformat(),
                     "ok" if got == datetime.fromisoformat(expected) else "MISMATCH"])
    table(["Input", "Expected", "Got", ""], rows)


# ---------------------------------------------------------------------------
# Section 3: Layout Scenarios
# ---------------------------------------------------------------------------
def section_layout():
    banner("COLUMN LAYOUT SCENARIOS")
    for case in _load(SCENARIOS / "layout.json")["layout"]:
        heading(case["id"])
        blocks = _scenario_blocks(case["blocks"])
        layout = compute_layout(blocks)
        rows = []
        for row in case["blocks"]:
            block_id = row[0]
            col, total = case["expected"][block_id]
            got = layout[block_id]
            match = (got.column, got.total_columns) == (col, total)
            rows.append([
                block_id, f"{row[1]}-{row[2]}",
                f"{col}/{total}", f"{got.column}/{got.total_columns}",
                "ok" if match else "MISMATCH",
            ])
        if rows:
            table(["Block", "Time", "Expected", "Got", ""], rows)
            print()
            show_day([b for b in blocks if b.day_id == DAY_ID], layout)
        else:
            print("    (no blocks)")


# ---------------------------------------------------------------------------
# Section 4: Sample Day
# ---------------------------------------------------------------------------
def section_sample_day():
    banner("SAMPLE DAY")
    day_id, day, blocks = load_day_json(FIXTURES / "day.json")
    print(f"\n    {day_id} on {day.isoformat()}, {len(blocks)} blocks")

    layout = compute_layout(blocks)
    conflicts = overlap_map(blocks)

    heading("Blocks")
    rows = []
    for b in blocks:
        geom = block_geometry(b, layout[b.id])
        rows.append([
            b.id, b.title, f"{_hhmm(b.start)}-{_hhmm(b.end)}",
            format_duration(b.duration),
            f"{layout[b.id].column}/{layout[b.id].total_columns}",
            f"{geom.top:.0f}px+{geom.height:.0f}",
            ", ".join(conflicts.get(b.id, [])) or "-",
            "yes" if is_outside_hours(b) else "",
        ])
    table(["Id", "Title", "Time", "Dur", "Col", "Top+H", "Overlaps", "Outside"], rows)

    heading("Planned Time")
    summary = summarize_day(blocks)
    rows = [[TYPE_LABELS.get(t, t), format_duration(m)]
            for t, m in summary.type_totals.items()]
    rows.append(["Total", format_duration(summary.grand_total)])
    table(["Type", "Time"], rows)

    print()
    show_day(blocks, layout)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main():
    banner("TIMELINE-PRIMITIVES   --  VISUAL VERIFICATION REPORT")
    print(f"    Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
    print(f"    Fixture data: {FIXTURES.relative_to(ROOT)}/")

    section_reference()
    section_snap()
    section_layout()
    section_sample_day()

    banner("END OF REPORT")
    print()


if __name__ == "__main__":
    main()
