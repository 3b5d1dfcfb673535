# backend/studiobook/services/slots/__init__.py
"""
Slots module.

Weekly template (availability) → candidate start times for a date
→ minus intervals taken by active bookings (calculator).
"""

from .config import BookingConfig, get_booking_config
from .calculator import derive_open_slots
from .availability import (
    ensure_default_availability,
    get_availability,
    set_availability,
)

__all__ = [
    "BookingConfig",
    "get_booking_config",
    "derive_open_slots",
    "ensure_default_availability",
    "get_availability",
    "set_availability",
]
