"""
Booking reminder checker.

Periodically looks for confirmed bookings taking place tomorrow and emits
one booking_reminder event per booking so the photographer is notified
the day before the session.

Runs as an asyncio task in the app lifespan.
Uses synchronous DB and Redis (via asyncio.to_thread).
"""

import asyncio
import logging
from datetime import date, timedelta

from redis import Redis
from sqlalchemy.orm import Session

from ..config import settings
from ..database import SessionLocal
from ..models.generated import Bookings
from ..redis_client import redis_client
from .events import booking_payload, emit_event
from .slots.config import BookingConfig, get_booking_config
from .slots.times import day_bounds

logger = logging.getLogger(__name__)


def sent_key(booking_id: int) -> str:
    return f"bkremind:sent:{booking_id}"


async def reminder_checker_loop() -> None:
    """Run check_upcoming_bookings every reminder_check_interval seconds."""
    logger.info("reminder_checker_loop started")

    try:
        while True:
            try:
                await asyncio.to_thread(_run_check)
            except asyncio.CancelledError:
                logger.info("reminder_checker_loop cancelled")
                raise
            except Exception:
                logger.exception("reminder_checker_loop error")

            await asyncio.sleep(settings.reminder_check_interval)
    except asyncio.CancelledError:
        pass


def _run_check() -> None:
    db = SessionLocal()
    try:
        check_upcoming_bookings(db, redis_client, date.today())
    finally:
        db.close()


def check_upcoming_bookings(
    db: Session,
    redis: Redis,
    today: date,
    config: BookingConfig | None = None,
) -> int:
    """
    Emit reminders for tomorrow's confirmed bookings.

    Returns:
        Number of reminders emitted in this pass.
    """
    config = config or get_booking_config()
    start_of_day, end_of_day = day_bounds(today + timedelta(days=1))

    bookings = (
        db.query(Bookings)
        .filter(
            Bookings.date >= start_of_day,
            Bookings.date <= end_of_day,
            Bookings.status == "confirmed",
        )
        .order_by(Bookings.date, Bookings.time_slot)
        .all()
    )
    logger.info(f"Found {len(bookings)} confirmed bookings for tomorrow")

    emitted = 0
    for booking in bookings:
        try:
            if _process_single_booking(booking, redis, config):
                emitted += 1
        except Exception:
            logger.exception(
                f"Error processing booking {booking.id} for reminder"
            )
    return emitted


def _process_single_booking(booking, redis: Redis, config: BookingConfig) -> bool:
    """Emit a reminder unless one was already sent for this booking."""
    key = sent_key(booking.id)
    if redis.exists(key):
        return False

    emit_event(redis, "booking_reminder", {
        **booking_payload(booking),
        "service_name": booking.service.name if booking.service else None,
        "client_name": booking.client_name,
    })
    redis.setex(key, config.reminder_sent_ttl_seconds, "1")

    logger.info(
        f"booking_reminder emitted for booking={booking.id} "
        f"(tomorrow at {booking.time_slot})"
    )
    return True
