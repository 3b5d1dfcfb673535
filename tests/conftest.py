"""Shared test fixtures and helpers."""

import os

os.environ.setdefault("STUDIOBOOK_DATABASE_URL", "sqlite://")
os.environ.setdefault("STUDIOBOOK_REMINDERS_ENABLED", "false")

import json
from datetime import date, datetime, time
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from studiobook.database import enable_sqlite_fk, get_db
from studiobook.main import app
from studiobook.models import Availability, Base, Bookings, Services
from studiobook.redis_client import get_redis

PHOTOGRAPHER_ID = 1
OTHER_PHOTOGRAPHER_ID = 2

MONDAY = date(2025, 3, 17)
TUESDAY = date(2025, 3, 18)


class FakeRedis:
    """In-memory stand-in for the few Redis commands the app uses."""

    def __init__(self):
        self.lists: dict[str, list[str]] = {}
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def rpush(self, key, *values):
        self.lists.setdefault(key, []).extend(values)
        return len(self.lists[key])

    def exists(self, key):
        return int(key in self.values)

    def setex(self, key, ttl, value):
        self.values[key] = value
        self.ttls[key] = ttl
        return True

    def ping(self):
        return True

    def events(self, event_type: Optional[str] = None) -> list[dict]:
        decoded = [json.loads(raw) for raw in self.lists.get("events:p2p", [])]
        if event_type is None:
            return decoded
        return [e for e in decoded if e["type"] == event_type]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", enable_sqlite_fk)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def client(session_factory, fake_redis):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = lambda: fake_redis
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth(photographer_id: int = PHOTOGRAPHER_ID) -> dict:
    return {"X-Photographer-Id": str(photographer_id)}


def make_service(
    db,
    duration: int = 60,
    photographer_id: int = PHOTOGRAPHER_ID,
    is_active: bool = True,
    name: str = "Portrait session",
) -> Services:
    service = Services(
        photographer_id=photographer_id,
        name=name,
        duration_min=duration,
        price=150.0,
        deposit_amount=50.0,
        is_active=1 if is_active else 0,
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


def make_availability(
    db,
    days: dict[str, list[str]],
    photographer_id: int = PHOTOGRAPHER_ID,
    unavailable: tuple[str, ...] = (),
) -> Availability:
    """days: {"Monday": ["09:00", ...]}; listed days are available unless in `unavailable`."""
    payload = [
        {"day": name, "is_available": name not in unavailable, "slots": slots}
        for name, slots in days.items()
    ]
    availability = Availability(
        photographer_id=photographer_id,
        timezone="UTC",
        days=json.dumps(payload),
    )
    db.add(availability)
    db.commit()
    db.refresh(availability)
    return availability


def make_booking(
    db,
    service: Services,
    target_date: date,
    time_slot: str,
    end_time: str,
    status: str = "confirmed",
    photographer_id: int = PHOTOGRAPHER_ID,
) -> Bookings:
    """Insert a booking directly, bypassing the conflict check."""
    booking = Bookings(
        photographer_id=photographer_id,
        service_id=service.id,
        client_name="Existing Client",
        client_email="existing@example.com",
        date=datetime.combine(target_date, time.min),
        time_slot=time_slot,
        end_time=end_time,
        status=status,
        payment_status="unpaid",
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking
