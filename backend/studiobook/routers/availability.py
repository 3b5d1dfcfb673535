# backend/studiobook/routers/availability.py
"""
Availability API endpoints.

GET /availability                          - own weekly template (created with defaults if absent)
PUT /availability                          - replace the weekly template
GET /availability/{photographer_id}/slots  - open slots for a service on a date (public)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_photographer_id
from ..models.generated import Availability as DBAvailability
from ..schemas.availability import AvailabilityRead, AvailabilityUpdate
from ..schemas.common import Envelope
from ..schemas.slots import SlotsResponse
from ..services.errors import ValidationError
from ..services.slots import (
    derive_open_slots,
    ensure_default_availability,
    get_booking_config,
    set_availability,
)
from ..services.slots.availability import load_days
from ..services.slots.times import parse_calendar_date

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/availability", tags=["availability"])


def _to_read(obj: DBAvailability) -> AvailabilityRead:
    return AvailabilityRead(
        id=obj.id,
        photographer_id=obj.photographer_id,
        timezone=obj.timezone,
        days=load_days(obj),
        created_at=obj.created_at,
        updated_at=obj.updated_at,
    )


@router.get("", response_model=Envelope[AvailabilityRead])
def get_own_availability(
    photographer_id: int = Depends(get_photographer_id),
    db: Session = Depends(get_db),
):
    """Own template. Creating the default template is part of this read."""
    obj = ensure_default_availability(db, photographer_id)
    return Envelope(data=_to_read(obj))


@router.put("", response_model=Envelope[AvailabilityRead])
def update_availability(
    data: AvailabilityUpdate,
    photographer_id: int = Depends(get_photographer_id),
    db: Session = Depends(get_db),
):
    obj = set_availability(
        db,
        photographer_id,
        days=[day.model_dump() for day in data.days],
        timezone=data.timezone,
    )
    return Envelope(data=_to_read(obj))


@router.get("/{photographer_id}/slots", response_model=SlotsResponse)
def get_available_slots(
    photographer_id: int,
    service_id: Optional[int] = Query(None, alias="serviceId"),
    date_str: Optional[str] = Query(None, alias="date"),
    db: Session = Depends(get_db),
):
    """Open start times for a service on a date (public)."""
    if not service_id or not date_str:
        raise ValidationError("Please provide serviceId and date")

    try:
        target_date = parse_calendar_date(date_str)
    except ValueError:
        raise ValidationError("Date must be in YYYY-MM-DD format") from None

    slots = derive_open_slots(
        db=db,
        photographer_id=photographer_id,
        service_id=service_id,
        target_date=target_date,
        config=get_booking_config(),
    )
    logger.debug(
        f"Slots for photographer={photographer_id} service={service_id} "
        f"date={target_date}: {len(slots)} open"
    )
    return SlotsResponse(data=slots)
