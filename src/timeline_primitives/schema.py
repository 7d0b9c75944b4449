"""Input validation for block records supplied as plain mappings."""

from __future__ import annotations

from timeline_primitives.validation import duration, validate_interval

# Storage records use camelCase keys; both spellings are accepted.
_KEY_ALIASES = {"dayId": "day_id"}


def normalize_record(record: dict) -> dict:
    """Copy of ``record`` with camelCase keys mapped to field names."""
    return {_KEY_ALIASES.get(k, k): v for k, v in record.items()}


def validate_block_record(record: dict) -> list[str]:
    """Validate one block record. Returns list of error messages (empty = valid).

    Checks:
    - id and day_id are non-empty strings, title is a string
    - start/end form a valid interval
    - duration, when given, matches start/end
    - tags, when given, is a list of strings
    """
    errors: list[str] = []
    data = normalize_record(record)
    label = data.get("id", "<no id>")

    for key in ("id", "day_id"):
        value = data.get(key)
        if not isinstance(value, str) or not value:
            errors.append(f"Block {label}: '{key}' must be a non-empty string")
    if not isinstance(data.get("title"), str):
        errors.append(f"Block {label}: 'title' must be a string")

    if "start" not in data or "end" not in data:
        errors.append(f"Block {label}: missing 'start' or 'end'")
    else:
        error = validate_interval(data["start"], data["end"])
        if error is not None:
            errors.append(f"Block {label}: {error.message}")
        elif "duration" in data:
            expected = duration(data["start"], data["end"])
            if data["duration"] != expected:
                errors.append(
                    f"Block {label}: duration {data['duration']!r} does not "
                    f"match start/end ({expected} minutes)"
                )

    tags = data.get("tags", [])
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        errors.append(f"Block {label}: 'tags' must be a list of strings")

    return errors
