"""API tests: booking creation and the my-bookings joined view."""
import uuid

import pytest

from app.models import Booking

pytestmark = pytest.mark.api

OWNER = "owner@example.com"
RENTER = "renter@example.com"


def _booking_body(vehicle_id, **overrides):
    body = {
        "vehicleId": str(vehicle_id),
        "startDate": "2025-03-01",
        "endDate": "2025-03-04",
        "totalPrice": 150,
    }
    body.update(overrides)
    return body


def test_create_booking_requires_token(client, make_vehicle):
    v = make_vehicle()
    r = client.post("/bookings", json=_booking_body(v.id))
    assert r.status_code == 401
    assert r.json()["message"] == "unauthorized access"


def test_create_booking_success(client, auth_headers, make_vehicle, db_session):
    v = make_vehicle()
    r = client.post("/bookings", json=_booking_body(v.id), headers=auth_headers(RENTER))
    assert r.status_code == 201
    data = r.json()
    assert data["insertedId"] == data["_id"]
    assert data["vehicleId"] == str(v.id)
    assert data["userEmail"] == RENTER
    assert data["startDate"] == "2025-03-01"
    assert data["totalPrice"] == 150
    assert db_session.query(Booking).count() == 1


def test_create_booking_ignores_client_user_email(client, auth_headers, make_vehicle, db_session):
    v = make_vehicle()
    body = _booking_body(v.id, userEmail="someone-else@example.com")
    r = client.post("/bookings", json=body, headers=auth_headers(RENTER))
    assert r.status_code == 201
    assert db_session.query(Booking).one().userEmail == RENTER


def test_create_booking_missing_vehicle_id_400(client, auth_headers):
    body = _booking_body("x")
    del body["vehicleId"]
    r = client.post("/bookings", json=body, headers=auth_headers(RENTER))
    assert r.status_code == 400


def test_create_booking_malformed_vehicle_id_400(client, auth_headers):
    r = client.post("/bookings", json=_booking_body("12345"), headers=auth_headers(RENTER))
    assert r.status_code == 400
    assert r.json()["error"]["field"] == "vehicleId"


def test_create_booking_unknown_vehicle_404(client, auth_headers):
    r = client.post("/bookings", json=_booking_body(uuid.uuid4()), headers=auth_headers(RENTER))
    assert r.status_code == 404


def test_create_booking_end_before_start_400(client, auth_headers, make_vehicle):
    v = make_vehicle()
    body = _booking_body(v.id, startDate="2025-03-05", endDate="2025-03-01")
    r = client.post("/bookings", json=body, headers=auth_headers(RENTER))
    assert r.status_code == 400


def test_my_bookings_requires_token(client):
    r = client.get("/my-bookings")
    assert r.status_code == 401


def test_my_bookings_empty(client, auth_headers):
    r = client.get("/my-bookings", headers=auth_headers(RENTER))
    assert r.status_code == 200
    assert r.json() == []


def test_my_bookings_joins_vehicle_newest_first(client, auth_headers, make_vehicle, make_booking):
    car = make_vehicle(vehicleName="Car")
    van = make_vehicle(minutes=1, vehicleName="Van")
    older = make_booking(car.id, minutes=5)
    newer = make_booking(van.id, minutes=10)
    make_booking(car.id, minutes=20, email="stranger@example.com")

    r = client.get("/my-bookings", headers=auth_headers(RENTER))
    assert r.status_code == 200
    rows = r.json()
    assert [row["_id"] for row in rows] == [str(newer.id), str(older.id)]
    assert rows[0]["vehicle"]["vehicleName"] == "Van"
    assert rows[1]["vehicle"]["_id"] == str(car.id)


def test_my_bookings_drops_dangling_booking(client, auth_headers, make_vehicle):
    """A booking whose vehicle was deleted afterwards is left out of the view."""
    kept = make_vehicle(userEmail=OWNER)
    doomed = make_vehicle(minutes=1, userEmail=OWNER)
    for v in (kept, doomed):
        r = client.post("/bookings", json=_booking_body(v.id), headers=auth_headers(RENTER))
        assert r.status_code == 201

    assert client.delete(f"/vehicles/{doomed.id}", headers=auth_headers(OWNER)).status_code == 200

    rows = client.get("/my-bookings", headers=auth_headers(RENTER)).json()
    assert [row["vehicleId"] for row in rows] == [str(kept.id)]
