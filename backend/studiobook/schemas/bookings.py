# backend/studiobook/schemas/bookings.py

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from ..services.slots.times import is_valid_time, parse_calendar_date
from .common import CamelModel

BookingStatus = Literal["pending", "confirmed", "cancelled", "completed"]
PaymentStatus = Literal["unpaid", "deposit_paid", "paid"]


class ServiceSummary(CamelModel):
    id: int
    name: str
    duration: int = Field(validation_alias="duration_min")
    price: float
    deposit_amount: float


class BookingCreate(CamelModel):
    photographer_id: int
    service_id: int
    client_name: str = Field(min_length=1)
    client_email: str = Field(min_length=3)
    client_phone: Optional[str] = None
    date: date
    time_slot: str = Field(description="Start time in HH:MM format")
    notes: Optional[str] = None

    @field_validator("client_name", "client_email")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field is required")
        return v

    @field_validator("client_email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("Please provide a valid email")
        return v.lower()

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        """Accept "YYYY-MM-DD" or a full ISO datetime."""
        if isinstance(v, str):
            return parse_calendar_date(v)
        return v

    @field_validator("time_slot")
    @classmethod
    def validate_time(cls, v: str) -> str:
        if not is_valid_time(v):
            raise ValueError("Time must be in HH:MM format")
        return v


class BookingStatusUpdate(CamelModel):
    status: BookingStatus


class BookingRead(CamelModel):
    id: int

    photographer_id: int
    service_id: int
    service: Optional[ServiceSummary] = None

    client_name: str
    client_email: str
    client_phone: Optional[str] = None

    date: datetime
    time_slot: str
    end_time: str

    status: BookingStatus
    payment_status: PaymentStatus
    notes: Optional[str] = None

    created_at: datetime
    updated_at: datetime
