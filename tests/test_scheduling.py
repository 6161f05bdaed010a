"""
Tests for appointment slot validation helpers.

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from serviflex.services.scheduling import (
    fits_working_hours,
    normalize_weekday,
    parse_clock,
    to_business_time,
    weekday_name,
)

SAO_PAULO = ZoneInfo("America/Sao_Paulo")


class TestParseClock:
    """Tests for HH:MM parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("00:00", 0),
        ("09:00", 540),
        ("9:30", 570),
        ("18:45", 1125),
        ("23:59", 1439),
    ])
    def test_valid_times(self, value, expected):
        assert parse_clock(value) == expected

    @pytest.mark.parametrize("value", ["", "9", "24:00", "12:60", "12:5", "ab:cd", "-1:00", "123:00"])
    def test_invalid_times(self, value):
        with pytest.raises(ValueError):
            parse_clock(value)


class TestWeekdays:
    """Tests for weekday naming and normalisation."""

    def test_weekday_name(self):
        # 2024-03-11 was a Monday
        assert weekday_name(datetime(2024, 3, 11, 10, 0)) == "Monday"
        assert weekday_name(datetime(2024, 3, 17, 10, 0)) == "Sunday"

    def test_normalize_weekday(self):
        assert normalize_weekday(" monday ") == "Monday"
        assert normalize_weekday("FRIDAY") == "Friday"
        assert normalize_weekday("Segunda") is None


class TestFitsWorkingHours:
    """Tests for slot containment inside declared windows."""

    WINDOW = [{"start_time": "09:00", "end_time": "18:00", "available": True}]

    def test_slot_inside_window(self):
        assert fits_working_hours(parse_clock("10:00"), 60, self.WINDOW) is True

    def test_slot_touching_both_edges(self):
        """
        Test that a slot may start at the window start and end exactly at its end.

        Arrange: 09:00-18:00 window
        Act: Check 09:00 + 540 minutes
        Assert: Fits
        """
        assert fits_working_hours(parse_clock("09:00"), 540, self.WINDOW) is True

    def test_slot_starting_before_window(self):
        assert fits_working_hours(parse_clock("08:59"), 30, self.WINDOW) is False

    def test_slot_running_past_window_end(self):
        assert fits_working_hours(parse_clock("17:30"), 45, self.WINDOW) is False

    def test_any_window_may_contain_slot(self):
        windows = [
            {"start_time": "08:00", "end_time": "12:00"},
            {"start_time": "14:00", "end_time": "18:00"},
        ]

        assert fits_working_hours(parse_clock("14:30"), 60, windows) is True
        assert fits_working_hours(parse_clock("11:30"), 60, windows) is False

    def test_unavailable_window_ignored(self):
        windows = [{"start_time": "09:00", "end_time": "18:00", "available": False}]

        assert fits_working_hours(parse_clock("10:00"), 30, windows) is False

    def test_malformed_window_skipped(self):
        windows = [
            {"start_time": "nine", "end_time": "18:00"},
            {"start_time": "09:00", "end_time": "18:00"},
        ]

        assert fits_working_hours(parse_clock("10:00"), 30, windows) is True

    def test_slot_past_midnight_never_fits(self):
        windows = [{"start_time": "00:00", "end_time": "23:59"}]

        assert fits_working_hours(parse_clock("23:30"), 60, windows) is False


class TestToBusinessTime:
    """Tests for timezone conversion of requested times."""

    def test_naive_value_taken_as_local(self):
        local = to_business_time(datetime(2024, 3, 11, 10, 0), SAO_PAULO)

        assert local.hour == 10
        assert local.tzinfo == SAO_PAULO

    def test_aware_value_converted(self):
        # 13:00 UTC is 10:00 in Sao Paulo (UTC-3)
        local = to_business_time(datetime(2024, 3, 11, 13, 0, tzinfo=timezone.utc), SAO_PAULO)

        assert local.hour == 10
        assert weekday_name(local) == "Monday"

    def test_conversion_can_change_weekday(self):
        # 01:00 UTC Tuesday is 22:00 Monday in Sao Paulo
        local = to_business_time(datetime(2024, 3, 12, 1, 0, tzinfo=timezone.utc), SAO_PAULO)

        assert weekday_name(local) == "Monday"
        assert local.hour == 22
