from .generated import (
    ACTIVE_BOOKING_STATUSES,
    Availability,
    Base,
    Bookings,
    Services,
    metadata,
)

__all__ = [
    "ACTIVE_BOOKING_STATUSES",
    "Availability",
    "Base",
    "Bookings",
    "Services",
    "metadata",
]
