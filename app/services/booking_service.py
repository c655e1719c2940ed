import logging
from sqlalchemy.orm import Session

from app.database import utcnow
from app.models.booking import Booking
from app.models.vehicle import Vehicle
from app.schemas.auth import VerifiedIdentity
from app.schemas.booking import BookingCreateRequest
from app.schemas.common import iso
from app.services.vehicle_service import serialize_vehicle
from app.utils.exceptions import NotFoundException
from app.utils.ids import parse_id

logger = logging.getLogger(__name__)


def _serialize(b: Booking) -> dict:
    return {
        "_id":        str(b.id),
        "vehicleId":  str(b.vehicleId),
        "userEmail":  b.userEmail,
        "startDate":  iso(b.startDate),
        "endDate":    iso(b.endDate),
        "totalPrice": b.totalPrice,
        "createdAt":  iso(b.createdAt),
    }


class BookingService:

    def create_booking(self, db: Session, data: BookingCreateRequest, identity: VerifiedIdentity) -> dict:
        vehicle_id = parse_id(data.vehicleId, field="vehicleId")
        if not db.query(Vehicle.id).filter(Vehicle.id == vehicle_id).first():
            raise NotFoundException("Vehicle")

        b = Booking(
            vehicleId=vehicle_id,
            userEmail=identity.email,
            startDate=data.startDate,
            endDate=data.endDate,
            totalPrice=data.totalPrice,
            createdAt=utcnow(),
        )
        db.add(b)
        db.commit()
        logger.info(f"Booking {b.id} created by {identity.email} for vehicle {vehicle_id}")
        return {"insertedId": str(b.id), **_serialize(b)}

    def my_bookings(self, db: Session, identity: VerifiedIdentity) -> list[dict]:
        """
        Caller's bookings joined with their vehicle, newest first.
        Inner join: bookings whose vehicle was deleted are left out.
        """
        rows = db.query(Booking, Vehicle)\
                 .join(Vehicle, Vehicle.id == Booking.vehicleId)\
                 .filter(Booking.userEmail == identity.email)\
                 .order_by(Booking.createdAt.desc(), Booking.id.asc())\
                 .all()
        return [{**_serialize(b), "vehicle": serialize_vehicle(v)} for b, v in rows]


booking_service = BookingService()
