"""Data loading utilities for day definitions, blocks and settings."""

from __future__ import annotations

import json
import logging
from dataclasses import fields
from datetime import date
from pathlib import Path

from timeline_primitives.blocks import create_block
from timeline_primitives.schema import normalize_record, validate_block_record
from timeline_primitives.settings import TimelineSettings
from timeline_primitives.types import Block

logger = logging.getLogger(__name__)

_BLOCK_FIELDS = {f.name for f in fields(Block)}


def block_from_record(record: dict) -> Block:
    """Build a Block from a storage-shaped mapping.

    Duration is always derived from start/end. Unknown keys are ignored.
    Raises ValueError if validation fails.
    """
    errors = validate_block_record(record)
    if errors:
        raise ValueError("\n".join(errors))

    data = {
        k: v for k, v in normalize_record(record).items() if k in _BLOCK_FIELDS
    }
    data.pop("duration", None)
    return create_block(
        data.pop("day_id"),
        data.pop("title"),
        data.pop("start"),
        data.pop("end"),
        block_id=data.pop("id"),
        **data,
    )


def load_day_json(path: str | Path) -> tuple[str, date, list[Block]]:
    """Load one day and its blocks from a JSON fixture file.

    The JSON file has the storage export format:
    {
        "day": { "id": "D1", "date": "2024-01-01" },
        "blocks": [ { "id": "...", "dayId": "D1", "title": "...",
                      "start": "...", "end": "...", ... }, ... ]
    }

    Raises ValueError if validation fails.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    day = data["day"]
    day_id = day["id"]
    try:
        day_date = date.fromisoformat(day["date"])
    except (ValueError, TypeError):
        raise ValueError(f"Invalid date in {path.name}: {day.get('date')!r}") from None

    errors: list[str] = []
    for record in data.get("blocks", []):
        errors.extend(validate_block_record(record))
        record_day = normalize_record(record).get("day_id")
        if record_day is not None and record_day != day_id:
            errors.append(
                f"Block {record.get('id')}: belongs to day {record_day!r}, "
                f"not {day_id!r}"
            )
    if errors:
        raise ValueError(
            f"Validation errors in {path.name}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    blocks = [block_from_record(record) for record in data.get("blocks", [])]
    logger.debug("loaded %d blocks for day %s from %s", len(blocks), day_id, path)
    return day_id, day_date, blocks


def load_settings_json(path: str | Path) -> TimelineSettings:
    """Load TimelineSettings from a JSON file.

    The file holds either the settings mapping itself or
    { "settings": { ... } }. Missing keys take their defaults.

    Raises ValueError if validation fails.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    return TimelineSettings.from_dict(data.get("settings", data))
