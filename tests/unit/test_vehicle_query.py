"""Unit tests: vehicle query construction and the ownership guard, against a test session."""
import itertools
import uuid

import pytest

from app.schemas.auth import VerifiedIdentity
from app.schemas.vehicle import SortField, SortOrder, VehicleFilterParams
from app.services.ownership import get_owned_vehicle
from app.services.vehicle_query import build_vehicle_query
from app.utils.exceptions import ForbiddenException, NotFoundException

pytestmark = pytest.mark.unit

FLEET = [
    {"vehicleName": "Axio",   "category": "Sedan", "location": "Dhaka",      "pricePerDay": 40,  "userEmail": "a@example.com"},
    {"vehicleName": "Prado",  "category": "SUV",   "location": "Chittagong", "pricePerDay": 90,  "userEmail": "b@example.com"},
    {"vehicleName": "Noah",   "category": "Van",   "location": "dhaka north", "pricePerDay": 60, "userEmail": "a@example.com"},
    {"vehicleName": "Pajero", "category": "SUV",   "location": "Sylhet",     "pricePerDay": 120, "userEmail": "c@example.com"},
]

OPTIONS = {
    "category":  [None, "SUV"],
    "location":  [None, "DHAKA"],
    "minPrice":  [None, 60.0],
    "maxPrice":  [None, 90.0],
    "userEmail": [None, "a@example.com"],
}


def _matches(row: dict, params: VehicleFilterParams) -> bool:
    if params.category and row["category"] != params.category:
        return False
    if params.location and params.location.lower() not in row["location"].lower():
        return False
    if params.minPrice is not None and row["pricePerDay"] < params.minPrice:
        return False
    if params.maxPrice is not None and row["pricePerDay"] > params.maxPrice:
        return False
    if params.userEmail and row["userEmail"] != params.userEmail:
        return False
    return True


@pytest.fixture
def fleet(make_vehicle):
    return [make_vehicle(minutes=i, **row) for i, row in enumerate(FLEET)]


def test_every_filter_combination_is_a_conjunction(db_session, fleet):
    keys = list(OPTIONS)
    for values in itertools.product(*(OPTIONS[k] for k in keys)):
        params = VehicleFilterParams(**dict(zip(keys, values)))
        got = {v.vehicleName for v in build_vehicle_query(db_session, params).all()}
        expected = {row["vehicleName"] for row in FLEET if _matches(row, params)}
        assert got == expected, params


def test_sort_and_limit(db_session, fleet):
    params = VehicleFilterParams(sortBy=SortField.PRICE, sortOrder=SortOrder.DESC, limit=2)
    names = [v.vehicleName for v in build_vehicle_query(db_session, params).all()]
    assert names == ["Pajero", "Prado"]


def test_equal_sort_keys_fall_back_to_id(db_session, make_vehicle):
    vehicles = [make_vehicle(category="SUV") for _ in range(3)]
    params = VehicleFilterParams(sortBy=SortField.CATEGORY)
    got = [v.id for v in build_vehicle_query(db_session, params).all()]
    assert got == sorted(v.id for v in vehicles)


def test_blank_strings_become_absent():
    params = VehicleFilterParams(category="  ", location="", userEmail=None,
                                 minPrice="", maxPrice=" ", limit="")
    assert params.category is None
    assert params.location is None
    assert params.minPrice is None and params.maxPrice is None
    assert params.limit is None


def test_guard_returns_vehicle_for_owner(db_session, make_vehicle):
    v = make_vehicle(userEmail="a@example.com")
    identity = VerifiedIdentity(email="a@example.com", uid="uid-a")
    assert get_owned_vehicle(db_session, v.id, identity).id == v.id


def test_guard_rejects_other_identity(db_session, make_vehicle):
    v = make_vehicle(userEmail="a@example.com")
    with pytest.raises(ForbiddenException):
        get_owned_vehicle(db_session, v.id, VerifiedIdentity(email="b@example.com", uid="uid-b"))


def test_guard_missing_vehicle(db_session):
    with pytest.raises(NotFoundException):
        get_owned_vehicle(db_session, uuid.uuid4(), VerifiedIdentity(email="a@example.com", uid="uid-a"))
