"""
backend/studiobook/services/events.py

Event emitter: pushes booking events to a Redis list for the notification
consumers (email, in-app notifications).

Queue: events:p2p, one JSON object per event:
    {"type": "booking_created", "booking_id": 12, ..., "ts": 1700000000}

Events are best effort. A Redis failure is logged and never fails the
booking operation that emitted it.
"""

import json
import time
import logging

from redis import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

P2P_QUEUE = "events:p2p"


def emit_event(redis: Redis | None, event_type: str, payload: dict) -> None:
    """Push an event to `events:p2p`. No-op without a Redis client."""
    if redis is None:
        logger.debug(f"Event {event_type} dropped: no redis client")
        return

    event = {
        "type": event_type,
        **payload,
        "ts": int(time.time()),
    }
    try:
        redis.rpush(P2P_QUEUE, json.dumps(event))
        logger.info(f"Event emitted: {event_type} → {P2P_QUEUE}")
    except RedisError as e:
        logger.error(f"Failed to emit event {event_type}: {e}")


def booking_payload(booking) -> dict:
    """Common event fields for a booking."""
    return {
        "booking_id": booking.id,
        "photographer_id": booking.photographer_id,
        "service_id": booking.service_id,
        "date": booking.date.date().isoformat(),
        "time_slot": booking.time_slot,
        "end_time": booking.end_time,
        "status": booking.status,
    }
