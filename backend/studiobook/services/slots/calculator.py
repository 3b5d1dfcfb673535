# backend/studiobook/services/slots/calculator.py
"""
Open slot derivation for a photographer, service and calendar date.

Steps:
1. Service duration (active service only)
2. Weekly template entry for the date's weekday
3. Active (pending/confirmed) bookings of that day
4. Drop every candidate whose [start, start + duration) overlaps a booking

Read-only: the template is never created here, a photographer without one
simply has no slots.
"""

from datetime import date
from sqlalchemy.orm import Session

from ...models.generated import ACTIVE_BOOKING_STATUSES, Bookings
from ..catalog import find_service
from ..errors import ServiceNotFound
from .availability import find_day, get_availability, load_days
from .config import BookingConfig, get_booking_config
from .times import (
    add_minutes_to_time,
    crosses_midnight,
    day_bounds,
    times_overlap,
    weekday_name,
)


def derive_open_slots(
    db: Session,
    photographer_id: int,
    service_id: int,
    target_date: date,
    config: BookingConfig | None = None,
) -> list[str]:
    """
    Calculate bookable start times for a service on a specific date.

    Returns:
        "HH:MM" strings in template order. Empty list = no slots.

    Raises:
        ServiceNotFound: unknown or inactive service, or one the photographer
            does not offer.
    """
    config = config or get_booking_config()

    # Step 1: Service duration
    service = find_service(db, service_id, photographer_id)
    if not service:
        raise ServiceNotFound()
    duration = service.duration_min

    # Step 2: Template entry for the weekday
    candidates = _get_day_candidates(db, photographer_id, target_date)
    if not candidates:
        return []

    # Step 3: Existing bookings of the day
    bookings = get_active_bookings(db, photographer_id, target_date)

    # Step 4: Filter, keeping template order
    open_slots = []
    for slot in candidates:
        if config.reject_overnight and crosses_midnight(slot, duration):
            continue

        slot_end = add_minutes_to_time(slot, duration)
        has_conflict = any(
            times_overlap(slot, slot_end, booking.time_slot, booking.end_time)
            for booking in bookings
        )
        if not has_conflict:
            open_slots.append(slot)

    return open_slots


# ── Helpers ──────────────────────────────────────────────────────────────


def _get_day_candidates(
    db: Session,
    photographer_id: int,
    target_date: date,
) -> list[str]:
    """Candidate start times configured for target_date's weekday."""
    availability = get_availability(db, photographer_id)
    if not availability:
        return []

    day = find_day(load_days(availability), weekday_name(target_date))
    if not day or not day.get("is_available"):
        return []

    return list(day.get("slots") or [])


def get_active_bookings(db: Session, photographer_id: int, target_date: date) -> list:
    """Pending/confirmed bookings of the photographer on target_date."""
    start_of_day, end_of_day = day_bounds(target_date)

    return (
        db.query(Bookings)
        .filter(
            Bookings.photographer_id == photographer_id,
            Bookings.date >= start_of_day,
            Bookings.date <= end_of_day,
            Bookings.status.in_(ACTIVE_BOOKING_STATUSES),
        )
        .all()
    )
