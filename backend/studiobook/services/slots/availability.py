# backend/studiobook/services/slots/availability.py
"""
Weekly availability template storage.

One row per photographer. `days` holds exactly one entry per weekday name:

    [{"day": "Monday", "is_available": true, "slots": ["09:00", "10:00"]}, ...]

Slots are candidate start times. Their order is kept exactly as written
(no sorting, no de-duplication); slot derivation preserves it in output.

get_availability() never writes. The default template is created only by
an explicit ensure_default_availability() call.
"""

import json
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models.generated import Availability
from .times import WEEKDAY_NAMES

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"


def default_days() -> list[dict]:
    """All weekdays unavailable, no slots."""
    return [
        {"day": name, "is_available": False, "slots": []}
        for name in WEEKDAY_NAMES
    ]


def load_days(availability: Availability) -> list[dict]:
    """Decode the stored template. Broken JSON reads as the default."""
    try:
        days = json.loads(availability.days) if availability.days else []
    except json.JSONDecodeError:
        logger.warning(
            f"Corrupt availability days for photographer={availability.photographer_id}"
        )
        days = []
    return days if isinstance(days, list) else []


def find_day(days: list[dict], day_name: str) -> dict | None:
    for entry in days:
        if isinstance(entry, dict) and entry.get("day") == day_name:
            return entry
    return None


def normalize_days(days: list[dict]) -> list[dict]:
    """
    One entry per weekday in Monday..Sunday order.

    Weekdays missing from `days` become unavailable with no slots.
    Duplicate names are rejected by the request schema before this point.
    """
    by_name = {entry["day"]: entry for entry in days}
    result = []
    for name in WEEKDAY_NAMES:
        entry = by_name.get(name)
        if entry is None:
            result.append({"day": name, "is_available": False, "slots": []})
        else:
            result.append({
                "day": name,
                "is_available": bool(entry.get("is_available", False)),
                "slots": list(entry.get("slots") or []),
            })
    return result


def get_availability(db: Session, photographer_id: int) -> Availability | None:
    return (
        db.query(Availability)
        .filter(Availability.photographer_id == photographer_id)
        .first()
    )


def ensure_default_availability(db: Session, photographer_id: int) -> Availability:
    """Return the photographer's template, creating the default one if absent."""
    availability = get_availability(db, photographer_id)
    if availability:
        return availability

    availability = Availability(
        photographer_id=photographer_id,
        timezone=DEFAULT_TIMEZONE,
        days=json.dumps(default_days()),
    )
    db.add(availability)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request created it first
        db.rollback()
        logger.info(f"Default availability already created for photographer={photographer_id}")
        return get_availability(db, photographer_id)
    db.refresh(availability)

    logger.info(f"Default availability created for photographer={photographer_id}")
    return availability


def set_availability(
    db: Session,
    photographer_id: int,
    days: list[dict],
    timezone: str | None = None,
) -> Availability:
    """
    Replace the whole weekly template.

    `timezone` is updated only when given; a new record defaults to UTC.
    """
    payload = json.dumps(normalize_days(days))

    availability = get_availability(db, photographer_id)
    if availability is None:
        availability = Availability(
            photographer_id=photographer_id,
            timezone=timezone or DEFAULT_TIMEZONE,
            days=payload,
        )
        db.add(availability)
        try:
            db.commit()
        except IntegrityError:
            # Lost the insert race; overwrite the row the other request made
            db.rollback()
            availability = get_availability(db, photographer_id)
            _apply_template(availability, payload, timezone)
            db.commit()
    else:
        _apply_template(availability, payload, timezone)
        db.commit()

    db.refresh(availability)

    logger.info(f"Availability replaced for photographer={photographer_id}")
    return availability


def _apply_template(availability: Availability, payload: str, timezone: str | None) -> None:
    availability.days = payload
    if timezone:
        availability.timezone = timezone
