# backend/studiobook/schemas/availability.py

from datetime import datetime
from typing import Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator

from ..services.slots.times import is_valid_time
from .common import CamelModel

WeekdayName = Literal[
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
]


class DayAvailability(CamelModel):
    day: WeekdayName
    is_available: bool = False
    slots: list[str] = Field(default_factory=list, description='Start times, "HH:MM" 24h')

    @field_validator("slots")
    @classmethod
    def validate_slots(cls, v: list[str]) -> list[str]:
        for slot in v:
            if not is_valid_time(slot):
                raise ValueError(f"Slot {slot!r} must be in HH:MM format")
        return v


class AvailabilityUpdate(CamelModel):
    days: list[DayAvailability] = Field(max_length=7)
    timezone: Optional[str] = None

    @field_validator("days")
    @classmethod
    def unique_days(cls, v: list[DayAvailability]) -> list[DayAvailability]:
        names = [d.day for d in v]
        if len(names) != len(set(names)):
            raise ValueError("Each weekday may appear only once")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise ValueError(f"Unknown timezone: {v}") from None
        return v


class AvailabilityRead(CamelModel):
    id: int
    photographer_id: int
    timezone: str
    days: list[DayAvailability]
    created_at: datetime
    updated_at: datetime
