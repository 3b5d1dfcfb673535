"""
Booking creation and status lifecycle.

Creation re-checks the requested interval against the store at write time:
the overlap test runs as a query right before the insert, and the partial
unique index on (photographer_id, date, time_slot) turns a lost race on the
same start time into a ConflictError. Two concurrent requests with different
but overlapping start times can still both pass; no application lock is taken.

Status transitions:
    pending   → confirmed | cancelled
    confirmed → completed | cancelled
    cancelled, completed: terminal
"""

import logging
from datetime import date, datetime, time

from redis import Redis
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.generated import ACTIVE_BOOKING_STATUSES, Bookings
from .catalog import find_service
from .errors import (
    ConflictError,
    ForbiddenError,
    InvalidTransition,
    NotFoundError,
    ServiceNotFound,
    ValidationError,
)
from .events import booking_payload, emit_event
from .slots.config import BookingConfig, get_booking_config
from .slots.times import add_minutes_to_time, crosses_midnight, day_bounds, is_valid_time

logger = logging.getLogger(__name__)

BOOKING_STATUSES = ("pending", "confirmed", "cancelled", "completed")
PAYMENT_STATUSES = ("unpaid", "deposit_paid", "paid")

TRANSITIONS: dict[str, tuple[str, ...]] = {
    "pending": ("confirmed", "cancelled"),
    "confirmed": ("completed", "cancelled"),
    "cancelled": (),
    "completed": (),
}


def can_transition(current: str, requested: str) -> bool:
    return requested in TRANSITIONS.get(current, ())


# ── Create ───────────────────────────────────────────────────────────────


def create_booking(
    db: Session,
    photographer_id: int,
    service_id: int,
    client_name: str,
    client_email: str,
    target_date: date,
    time_slot: str,
    client_phone: str | None = None,
    notes: str | None = None,
    config: BookingConfig | None = None,
    redis: Redis | None = None,
) -> Bookings:
    """
    Create a pending booking if [time_slot, time_slot + duration) is free.

    Raises:
        ValidationError: missing/malformed fields, overnight interval.
        ServiceNotFound: unknown or inactive service, or one the photographer
            does not offer.
        ConflictError: interval overlaps an active booking.
    """
    config = config or get_booking_config()

    # Step 1: Required fields
    client_name = (client_name or "").strip()
    client_email = (client_email or "").strip().lower()
    if not photographer_id or not service_id or not client_name or not client_email:
        raise ValidationError()
    if target_date is None or not time_slot:
        raise ValidationError()
    if not is_valid_time(time_slot):
        raise ValidationError("Please provide time in HH:MM format")

    # Step 2: Service
    service = find_service(db, service_id, photographer_id)
    if not service:
        raise ServiceNotFound()

    # Step 3: End time
    duration = service.duration_min
    if config.reject_overnight and crosses_midnight(time_slot, duration):
        raise ValidationError("Booking cannot run past midnight")
    end_time = add_minutes_to_time(time_slot, duration)

    # Step 4: Write-time conflict check
    conflicting = find_conflicting_booking(db, photographer_id, target_date, time_slot, end_time)
    if conflicting:
        logger.info(
            f"Booking conflict: photographer={photographer_id} "
            f"date={target_date} {time_slot}-{end_time} "
            f"overlaps booking={conflicting.id}"
        )
        raise ConflictError()

    # Step 5: Insert
    booking = Bookings(
        photographer_id=photographer_id,
        service_id=service.id,
        client_name=client_name,
        client_email=client_email,
        client_phone=(client_phone or "").strip() or None,
        date=datetime.combine(target_date, time.min),
        time_slot=time_slot,
        end_time=end_time,
        notes=(notes or "").strip() or None,
        status="pending",
        payment_status="unpaid",
    )
    db.add(booking)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(
            f"Booking race lost: photographer={photographer_id} "
            f"date={target_date} time_slot={time_slot}"
        )
        raise ConflictError() from None
    db.refresh(booking)

    logger.info(
        f"Booking created: booking_id={booking.id}, "
        f"photographer={photographer_id}, service={service.name}, "
        f"time={target_date} {time_slot}-{end_time}"
    )

    emit_event(redis, "booking_created", {
        **booking_payload(booking),
        "client_name": booking.client_name,
        "client_email": booking.client_email,
    })

    return booking


def find_conflicting_booking(
    db: Session,
    photographer_id: int,
    target_date: date,
    time_slot: str,
    end_time: str,
) -> Bookings | None:
    """
    First active booking whose [time_slot, end_time) overlaps the given one.

    Evaluated by the database on zero-padded "HH:MM" strings, which order
    the same way as minutes of day.
    """
    start_of_day, end_of_day = day_bounds(target_date)

    return (
        db.query(Bookings)
        .filter(
            Bookings.photographer_id == photographer_id,
            Bookings.date >= start_of_day,
            Bookings.date <= end_of_day,
            Bookings.status.in_(ACTIVE_BOOKING_STATUSES),
            Bookings.time_slot < end_time,
            Bookings.end_time > time_slot,
        )
        .first()
    )


# ── Read ─────────────────────────────────────────────────────────────────


def list_bookings(
    db: Session,
    photographer_id: int,
    status: str | None = None,
) -> list[Bookings]:
    """Photographer's bookings, by date then start time."""
    query = db.query(Bookings).filter(Bookings.photographer_id == photographer_id)
    if status:
        query = query.filter(Bookings.status == status)
    return query.order_by(Bookings.date, Bookings.time_slot).all()


def get_owned_booking(db: Session, booking_id: int, requester_id: int) -> Bookings:
    booking = db.get(Bookings, booking_id)
    if not booking:
        raise NotFoundError("Booking not found")
    if booking.photographer_id != requester_id:
        logger.warning(
            f"Booking {booking_id} access denied for photographer={requester_id}"
        )
        raise ForbiddenError()
    return booking


# ── Status lifecycle ─────────────────────────────────────────────────────


def update_status(
    db: Session,
    booking_id: int,
    requester_id: int,
    new_status: str,
    redis: Redis | None = None,
) -> Bookings:
    """
    Move an owned booking to new_status.

    Setting the current status again is a no-op.
    """
    if new_status not in BOOKING_STATUSES:
        raise ValidationError(f"Invalid status: {new_status}")

    booking = get_owned_booking(db, booking_id, requester_id)
    if booking.status == new_status:
        return booking

    if not can_transition(booking.status, new_status):
        raise InvalidTransition(booking.status, new_status)

    previous = booking.status
    booking.status = new_status
    db.commit()
    db.refresh(booking)

    logger.info(f"Booking {booking_id} status: {previous} → {new_status}")

    emit_event(redis, "booking_status_changed", {
        **booking_payload(booking),
        "previous_status": previous,
    })
    return booking


def cancel_booking(
    db: Session,
    booking_id: int,
    requester_id: int,
    redis: Redis | None = None,
) -> Bookings:
    """Cancel an owned booking. Already cancelled → no-op, completed → error."""
    booking = get_owned_booking(db, booking_id, requester_id)
    if booking.status == "cancelled":
        return booking

    if not can_transition(booking.status, "cancelled"):
        raise InvalidTransition(booking.status, "cancelled")

    booking.status = "cancelled"
    db.commit()
    db.refresh(booking)

    logger.info(f"Booking {booking_id} cancelled by photographer={requester_id}")

    emit_event(redis, "booking_cancelled", booking_payload(booking))
    return booking


def delete_booking(db: Session, booking_id: int, requester_id: int) -> None:
    """Physically remove an owned booking."""
    booking = get_owned_booking(db, booking_id, requester_id)
    db.delete(booking)
    db.commit()

    logger.info(f"Booking {booking_id} deleted by photographer={requester_id}")
