"""Tests for TimelineSettings and validate_settings."""

from __future__ import annotations

import pytest


class TestDefaults:

    def test_defaults(self):
        from timeline_primitives.settings import DEFAULT_SETTINGS

        assert DEFAULT_SETTINGS.start_hour == 8
        assert DEFAULT_SETTINGS.end_hour == 18
        assert DEFAULT_SETTINGS.pixels_per_hour == 60
        assert DEFAULT_SETTINGS.grid_minutes == 15
        assert DEFAULT_SETTINGS.keyboard_step_minutes == 15
        assert DEFAULT_SETTINGS.keyboard_large_step_minutes == 60

    def test_derived_values(self):
        from timeline_primitives.settings import TimelineSettings

        settings = TimelineSettings(start_hour=7, end_hour=10, grid_minutes=30)
        assert settings.window_start_minutes == 420
        assert settings.window_end_minutes == 600
        assert settings.visible_hours() == [7, 8, 9, 10]
        assert settings.grid.minutes == 30
        assert settings.grid.snap_minutes(44) == 30

    def test_frozen(self):
        from timeline_primitives.settings import DEFAULT_SETTINGS

        with pytest.raises(AttributeError):
            DEFAULT_SETTINGS.start_hour = 3  # type: ignore[misc]


class TestValidateSettings:
    """validate_settings() returns every problem, empty when valid."""

    def test_empty_is_valid(self):
        from timeline_primitives.settings import validate_settings

        assert validate_settings({}) == []

    @pytest.mark.parametrize(
        "data,fragment",
        [
            ({"start_hour": -1}, "start_hour must be an integer between 0 and 23"),
            ({"end_hour": 24}, "end_hour must be an integer between 0 and 23"),
            ({"start_hour": "8"}, "start_hour must be an integer"),
            ({"start_hour": 12, "end_hour": 12}, "End hour must be after start hour"),
            ({"start_hour": 14, "end_hour": 10}, "End hour must be after start hour"),
            ({"start_hour": 9, "end_hour": 10}, "Range must be at least 2 hours"),
            ({"pixels_per_hour": 0}, "pixels_per_hour must be a positive number"),
            ({"pixels_per_hour": True}, "pixels_per_hour must be a positive number"),
            ({"grid_minutes": 7}, "grid_minutes must be a positive divisor of 60"),
            ({"grid_minutes": 0}, "grid_minutes must be a positive divisor of 60"),
            ({"keyboard_step_minutes": 0}, "keyboard_step_minutes must be a positive integer"),
        ],
    )
    def test_errors(self, data, fragment):
        from timeline_primitives.settings import validate_settings

        errors = validate_settings(data)
        assert any(fragment in e for e in errors), errors

    def test_collects_every_error(self):
        from timeline_primitives.settings import validate_settings

        errors = validate_settings({"start_hour": 30, "grid_minutes": 7, "pixels_per_hour": -1})
        assert len(errors) == 3


class TestFromDict:

    def test_partial_mapping(self):
        from timeline_primitives.settings import TimelineSettings

        settings = TimelineSettings.from_dict({"start_hour": 6})
        assert settings.start_hour == 6
        assert settings.end_hour == 18

    def test_round_trip(self):
        from timeline_primitives.settings import TimelineSettings

        settings = TimelineSettings(start_hour=5, end_hour=22, pixels_per_hour=90.0)
        assert TimelineSettings.from_dict(settings.to_dict()) == settings

    def test_invalid_raises_with_all_messages(self):
        from timeline_primitives.settings import TimelineSettings

        with pytest.raises(ValueError) as exc_info:
            TimelineSettings.from_dict({"start_hour": 12, "end_hour": 11, "colour": "red"})
        message = str(exc_info.value)
        assert "Unknown setting: colour" in message
        assert "End hour must be after start hour" in message
