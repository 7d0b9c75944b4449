"""Timeline settings: visible day window, scale, grid and keyboard steps."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields

from timeline_primitives.grid import TimeGrid

MIN_VISIBLE_HOURS = 2


@dataclass(frozen=True)
class TimelineSettings:
    """Display and interaction settings for one timeline.

    ``start_hour``/``end_hour`` bound the visible day window, which only
    affects rendering and the outside-hours warning. Drag and resize are
    bounded by the whole day (00:00-24:00) regardless.
    """

    start_hour: int = 8
    end_hour: int = 18
    pixels_per_hour: float = 60.0
    grid_minutes: int = 15
    keyboard_step_minutes: int = 15
    keyboard_large_step_minutes: int = 60

    @property
    def grid(self) -> TimeGrid:
        return TimeGrid(minutes=self.grid_minutes, label=f"{self.grid_minutes}-minute")

    @property
    def window_start_minutes(self) -> int:
        return self.start_hour * 60

    @property
    def window_end_minutes(self) -> int:
        return self.end_hour * 60

    def visible_hours(self) -> list[int]:
        """Hour labels drawn down the side of the timeline, inclusive."""
        return list(range(self.start_hour, self.end_hour + 1))

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> TimelineSettings:
        """Build settings from a plain mapping, filling unset keys with defaults.

        Raises ValueError listing every validation failure.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        errors = [f"Unknown setting: {key}" for key in unknown]
        errors.extend(validate_settings(data))
        if errors:
            raise ValueError(
                "Invalid timeline settings:\n"
                + "\n".join(f"  - {e}" for e in errors)
            )
        return cls(**{k: v for k, v in data.items() if k in known})


DEFAULT_SETTINGS = TimelineSettings()


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_settings(data: dict) -> list[str]:
    """Validate a settings mapping. Returns list of error messages (empty = valid).

    Checks:
    - Hours are integers 0-23
    - start_hour < end_hour, with at least two visible hours
    - pixels_per_hour is a positive number
    - grid_minutes divides an hour evenly
    - Keyboard steps are positive integers
    """
    errors: list[str] = []
    merged = {**DEFAULT_SETTINGS.to_dict(), **data}

    hours_ok = True
    for key in ("start_hour", "end_hour"):
        value = merged[key]
        if not _is_int(value) or not 0 <= value <= 23:
            errors.append(f"{key} must be an integer between 0 and 23, got {value!r}")
            hours_ok = False

    if hours_ok:
        start, end = merged["start_hour"], merged["end_hour"]
        if start >= end:
            errors.append("End hour must be after start hour")
        elif end - start < MIN_VISIBLE_HOURS:
            errors.append(f"Range must be at least {MIN_VISIBLE_HOURS} hours")

    pph = merged["pixels_per_hour"]
    if isinstance(pph, bool) or not isinstance(pph, (int, float)) or pph <= 0:
        errors.append(f"pixels_per_hour must be a positive number, got {pph!r}")

    grid = merged["grid_minutes"]
    if not _is_int(grid) or grid <= 0 or 60 % grid != 0:
        errors.append(f"grid_minutes must be a positive divisor of 60, got {grid!r}")

    for key in ("keyboard_step_minutes", "keyboard_large_step_minutes"):
        value = merged[key]
        if not _is_int(value) or value <= 0:
            errors.append(f"{key} must be a positive integer, got {value!r}")

    return errors
