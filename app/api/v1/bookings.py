from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_verified_identity
from app.schemas.auth import VerifiedIdentity
from app.schemas.booking import BookingCreateRequest
from app.schemas.common import AUTH_RESPONSES
from app.services.booking_service import booking_service

router = APIRouter()


@router.post("/bookings", status_code=status.HTTP_201_CREATED, summary="Book a vehicle",
             responses=AUTH_RESPONSES)
def create_booking(
    body:     BookingCreateRequest,
    db:       Session          = Depends(get_db),
    identity: VerifiedIdentity = Depends(get_verified_identity),
):
    return booking_service.create_booking(db, body, identity)


@router.get("/my-bookings", summary="Caller's bookings with vehicle details",
            responses=AUTH_RESPONSES)
def my_bookings(
    db:       Session          = Depends(get_db),
    identity: VerifiedIdentity = Depends(get_verified_identity),
):
    return booking_service.my_bookings(db, identity)
