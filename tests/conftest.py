# Set test environment before any application or db imports.
import os

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_ENV"] = "test"

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine, get_db
from app.main import app
from app.models import Booking, Vehicle
from app.utils.security import create_identity_token

OWNER_EMAIL = "owner@example.com"
RENTER_EMAIL = "renter@example.com"
OTHER_EMAIL = "other@example.com"

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def tables():
    """Fresh schema for every test; dropped afterwards so tests don't leak rows."""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def db_session(tables):
    """Session shared by the test body and the API (see client)."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _override_get_db(session):
    """Return a generator that yields the given session (for dependency override)."""
    def override():
        yield session
    return override


@pytest.fixture
def client(db_session):
    """API test client; overrides get_db to use the test db_session, cleared on teardown."""
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Factory: Authorization header carrying a valid token for the given email."""
    def make(email: str = OWNER_EMAIL, uid: str | None = None) -> dict:
        token = create_identity_token(email, uid or f"uid-{email.split('@')[0]}")
        return {"Authorization": f"Bearer {token}"}
    return make


@pytest.fixture
def make_vehicle(db_session):
    """Factory: insert a vehicle row directly; minutes controls createdAt ordering."""
    def make(minutes: int = 0, **overrides) -> Vehicle:
        ts = BASE_TIME + timedelta(minutes=minutes)
        values = {
            "vehicleName": "Test Vehicle",
            "owner": "Test Owner",
            "category": "SUV",
            "pricePerDay": 50.0,
            "location": "Dhaka",
            "userEmail": OWNER_EMAIL,
            "createdAt": ts,
            "updatedAt": ts,
        }
        values.update(overrides)
        vehicle = Vehicle(**values)
        db_session.add(vehicle)
        db_session.commit()
        return vehicle
    return make


@pytest.fixture
def make_booking(db_session):
    """Factory: insert a booking row directly, bypassing the vehicle existence check."""
    def make(vehicle_id, minutes: int = 0, email: str = RENTER_EMAIL, **overrides) -> Booking:
        values = {
            "vehicleId": vehicle_id,
            "userEmail": email,
            "totalPrice": 100.0,
            "createdAt": BASE_TIME + timedelta(minutes=minutes),
        }
        values.update(overrides)
        booking = Booking(**values)
        db_session.add(booking)
        db_session.commit()
        return booking
    return make
