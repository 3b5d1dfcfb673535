# backend/studiobook/services/slots/config.py
"""
Booking configuration for slot derivation and booking creation.
"""

from dataclasses import dataclass
from functools import lru_cache

from ...config import settings


@dataclass(frozen=True)
class BookingConfig:
    """
    Configuration for the booking engine.

    Attributes:
        reject_overnight: Drop candidate slots (and refuse bookings) whose
            interval would run past midnight. When False the "HH:MM"
            arithmetic wraps and the end time is stored as-is.
        reminder_sent_ttl_seconds: How long a sent reminder marker lives.
    """
    reject_overnight: bool = True
    reminder_sent_ttl_seconds: int = 86400  # 24 hours

    def __post_init__(self):
        """Validate configuration."""
        if self.reminder_sent_ttl_seconds <= 0:
            raise ValueError(
                f"reminder_sent_ttl_seconds must be positive, got {self.reminder_sent_ttl_seconds}"
            )


@lru_cache
def get_booking_config() -> BookingConfig:
    """Get booking configuration (singleton), built from settings."""
    return BookingConfig(reject_overnight=settings.reject_overnight)
