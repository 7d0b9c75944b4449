"""Shared test fixtures and data loading for timeline-primitives.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference day: Mon 2024-01-01, day id D1.
Reference "now": the day before, so no reference block is in the past.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_reference = _load_json(FIXTURES_DIR / "reference.json")


# ---------------------------------------------------------------------------
# Reference constants derived from reference.json
# ---------------------------------------------------------------------------
DAY_ID = _reference["day_id"]
OTHER_DAY_ID = _reference["other_day_id"]
DAY = date.fromisoformat(_reference["date"])
NOW = datetime.fromisoformat(_reference["now"])
PIXELS_PER_HOUR = _reference["pixels_per_hour"]
GRID_MINUTES = _reference["grid_minutes"]


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def ts(time_label: str, day: date = DAY) -> str:
    """ISO timestamp for a time label on the reference day.

    >>> ts("09:30")
    '2024-01-01T09:30:00'
    """
    return f"{day.isoformat()}T{time_label}:00"


def dt(time_label: str, day: date = DAY) -> datetime:
    """Datetime for a time label on the reference day."""
    return datetime.fromisoformat(ts(time_label, day))


def px(minutes: float) -> float:
    """Pointer travel in pixels for a number of minutes at the reference scale."""
    return minutes / 60 * PIXELS_PER_HOUR


def make_block(
    block_id: str,
    start: str,
    end: str,
    day_id: str = DAY_ID,
    **fields,
):
    """Build a Block on the reference day from 'HH:MM' labels."""
    from timeline_primitives.blocks import create_block

    fields.setdefault("title", f"Block {block_id}")
    title = fields.pop("title")
    return create_block(day_id, title, ts(start), ts(end), block_id=block_id, **fields)


def blocks_from_rows(rows: list[list[str]]):
    """Build blocks from scenario rows: [id, start, end] or [id, start, end, day]."""
    return [make_block(*row) for row in rows]


def make_context(now: datetime = NOW, **settings):
    """TimelineContext for the reference day with a frozen clock."""
    from timeline_primitives.clock import fixed_clock
    from timeline_primitives.controller import TimelineContext
    from timeline_primitives.settings import TimelineSettings

    settings.setdefault("pixels_per_hour", PIXELS_PER_HOUR)
    settings.setdefault("grid_minutes", GRID_MINUTES)
    return TimelineContext(
        day=DAY,
        settings=TimelineSettings(**settings),
        clock=fixed_clock(now),
    )


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


def fixture_path(name: str) -> Path:
    """Path of a top-level fixture file in data/fixtures/."""
    return FIXTURES_DIR / name


# ---------------------------------------------------------------------------
# Storage collaborator double
# ---------------------------------------------------------------------------
class RecordingStore:
    """BlockStore that records every call it receives."""

    def __init__(self) -> None:
        self.created: list = []
        self.updates: list[tuple[str, dict]] = []
        self.deleted: list[str] = []

    def create_block(self, block) -> None:
        self.created.append(block)

    def update_block(self, block_id: str, changes: dict) -> None:
        self.updates.append((block_id, dict(changes)))

    def delete_block(self, block_id: str) -> None:
        self.deleted.append(block_id)


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def context():
    return make_context()


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def nine_to_ten():
    """The 09:00-10:00 block used by the drag and resize scenarios."""
    return make_block("b1", "09:00", "10:00")


@pytest.fixture
def sample_day():
    """(day_id, date, blocks) loaded from data/fixtures/day.json."""
    from timeline_primitives.loaders import load_day_json

    return load_day_json(FIXTURES_DIR / "day.json")
