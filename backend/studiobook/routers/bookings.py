# backend/studiobook/routers/bookings.py
# POST is public (clients book); everything else is owner-only.

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_photographer_id
from ..redis_client import get_redis
from ..schemas.bookings import (
    BookingCreate,
    BookingRead,
    BookingStatus,
    BookingStatusUpdate,
)
from ..schemas.common import Envelope, ListEnvelope, MessageEnvelope
from ..services import bookings as booking_service
from ..services.slots import get_booking_config

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("", response_model=ListEnvelope[BookingRead])
def list_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    photographer_id: int = Depends(get_photographer_id),
    db: Session = Depends(get_db),
):
    rows = booking_service.list_bookings(db, photographer_id, status_filter)
    data = [BookingRead.model_validate(row) for row in rows]
    return ListEnvelope(count=len(data), data=data)


@router.post("", response_model=Envelope[BookingRead], status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    booking = booking_service.create_booking(
        db,
        photographer_id=data.photographer_id,
        service_id=data.service_id,
        client_name=data.client_name,
        client_email=data.client_email,
        client_phone=data.client_phone,
        target_date=data.date,
        time_slot=data.time_slot,
        notes=data.notes,
        config=get_booking_config(),
        redis=redis,
    )
    return Envelope(data=BookingRead.model_validate(booking))


@router.put("/{id}/status", response_model=Envelope[BookingRead])
def update_booking_status(
    id: int,
    data: BookingStatusUpdate,
    photographer_id: int = Depends(get_photographer_id),
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    booking = booking_service.update_status(db, id, photographer_id, data.status, redis=redis)
    return Envelope(data=BookingRead.model_validate(booking))


@router.delete("/{id}", response_model=MessageEnvelope[BookingRead])
def cancel_booking(
    id: int,
    photographer_id: int = Depends(get_photographer_id),
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    booking = booking_service.cancel_booking(db, id, photographer_id, redis=redis)
    return MessageEnvelope(
        message="Booking cancelled successfully",
        data=BookingRead.model_validate(booking),
    )


@router.delete("/{id}/purge", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(
    id: int,
    photographer_id: int = Depends(get_photographer_id),
    db: Session = Depends(get_db),
):
    booking_service.delete_booking(db, id, photographer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
