"""Tests for "HH:MM" arithmetic and date helpers."""

from datetime import date, datetime

import pytest

from studiobook.services.slots.times import (
    add_minutes_to_time,
    crosses_midnight,
    day_bounds,
    is_valid_time,
    minutes_to_time,
    parse_calendar_date,
    time_to_minutes,
    times_overlap,
    weekday_name,
)


class TestTimeArithmetic:

    def test_time_to_minutes(self):
        assert time_to_minutes("00:00") == 0
        assert time_to_minutes("09:30") == 570
        assert time_to_minutes("23:50") == 1430

    def test_minutes_to_time_zero_pads(self):
        assert minutes_to_time(65) == "01:05"

    def test_add_minutes(self):
        assert add_minutes_to_time("09:00", 60) == "10:00"
        assert add_minutes_to_time("10:45", 90) == "12:15"

    def test_add_minutes_wraps_at_midnight(self):
        assert add_minutes_to_time("23:50", 30) == "00:20"
        assert add_minutes_to_time("23:00", 60) == "00:00"

    def test_crosses_midnight(self):
        assert crosses_midnight("23:50", 30)
        assert crosses_midnight("23:00", 60)
        assert not crosses_midnight("22:00", 60)

    @pytest.mark.parametrize("value", ["00:00", "09:05", "19:59", "23:59"])
    def test_valid_times(self, value):
        assert is_valid_time(value)

    @pytest.mark.parametrize("value", ["24:00", "9:00", "09:60", "0900", "", "09:00:00"])
    def test_invalid_times(self, value):
        assert not is_valid_time(value)


class TestOverlap:

    def test_overlapping(self):
        assert times_overlap("09:00", "10:00", "09:30", "10:30")
        assert times_overlap("09:30", "10:30", "09:00", "10:00")

    def test_containment_overlaps(self):
        assert times_overlap("09:00", "12:00", "10:00", "11:00")
        assert times_overlap("10:00", "11:00", "09:00", "12:00")

    def test_touching_intervals_do_not_overlap(self):
        assert not times_overlap("09:00", "10:00", "10:00", "11:00")
        assert not times_overlap("10:00", "11:00", "09:00", "10:00")

    def test_disjoint(self):
        assert not times_overlap("08:00", "09:00", "13:00", "14:00")

    def test_matches_half_open_definition(self):
        points = ["08:00", "08:30", "09:00", "09:30", "10:00"]
        for s1 in points:
            for e1 in points:
                for s2 in points:
                    for e2 in points:
                        expected = (
                            time_to_minutes(s1) < time_to_minutes(e2)
                            and time_to_minutes(e1) > time_to_minutes(s2)
                        )
                        assert times_overlap(s1, e1, s2, e2) == expected


class TestDates:

    def test_weekday_name(self):
        assert weekday_name(date(2025, 3, 17)) == "Monday"
        assert weekday_name(date(2025, 3, 23)) == "Sunday"

    def test_day_bounds(self):
        start, end = day_bounds(date(2025, 3, 17))
        assert start == datetime(2025, 3, 17, 0, 0, 0)
        assert end.date() == date(2025, 3, 17)
        assert (end.hour, end.minute, end.second) == (23, 59, 59)

    def test_parse_plain_date(self):
        assert parse_calendar_date("2025-03-17") == date(2025, 3, 17)

    def test_parse_iso_datetime(self):
        assert parse_calendar_date("2025-03-17T10:00:00Z") == date(2025, 3, 17)

    @pytest.mark.parametrize("value", ["", "tomorrow", "2025-13-01"])
    def test_parse_rejects_garbage(self, value):
        with pytest.raises(ValueError):
            parse_calendar_date(value)
