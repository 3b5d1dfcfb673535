# backend/studiobook/services/slots/times.py
"""
"HH:MM" time arithmetic shared by slot derivation and booking creation.

All values are minutes of day in [0, 1440). Adding minutes wraps modulo
1440 and never rolls over to the next calendar date:

    add_minutes_to_time("23:50", 30) == "00:20"

Callers that must not accept such intervals check crosses_midnight() first.
"""

import re
from datetime import date, datetime, time

MINUTES_PER_DAY = 24 * 60

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def is_valid_time(value: str) -> bool:
    return bool(TIME_PATTERN.fullmatch(value))


def time_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes of day."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(total_minutes: int) -> str:
    """Convert minutes to "HH:MM", wrapping at 24h."""
    total_minutes %= MINUTES_PER_DAY
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def add_minutes_to_time(value: str, minutes: int) -> str:
    return minutes_to_time(time_to_minutes(value) + minutes)


def crosses_midnight(value: str, minutes: int) -> bool:
    """
    True if [value, value + minutes) does not fit before 24:00.

    An interval ending exactly at midnight counts as crossing: its stored
    end time would read "00:00" and sort before its own start.
    """
    return time_to_minutes(value) + minutes >= MINUTES_PER_DAY


def times_overlap(start1: str, end1: str, start2: str, end2: str) -> bool:
    """Half-open interval intersection; touching intervals do not overlap."""
    return (
        time_to_minutes(start1) < time_to_minutes(end2)
        and time_to_minutes(end1) > time_to_minutes(start2)
    )


def weekday_name(target_date: date) -> str:
    """Civil weekday of the date itself, independent of any timezone."""
    return WEEKDAY_NAMES[target_date.weekday()]


def day_bounds(target_date: date) -> tuple[datetime, datetime]:
    """[00:00:00, 23:59:59.999999] of target_date."""
    return (
        datetime.combine(target_date, time.min),
        datetime.combine(target_date, time.max),
    )


def parse_calendar_date(value: str) -> date:
    """
    Parse "YYYY-MM-DD" or a full ISO datetime into a calendar date.

    Raises ValueError on anything else.
    """
    value = value.strip()
    if not value:
        raise ValueError("Empty date")
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
