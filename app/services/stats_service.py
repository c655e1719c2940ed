from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.booking import Booking
from app.models.vehicle import Vehicle
from app.schemas.common import iso


class StatsService:

    def top_vehicles(self, db: Session, limit: int) -> list[dict]:
        """
        Most-booked vehicles.

        Bookings are grouped by vehicleId, ranked by booking count, then by
        the most recent booking, then by vehicleId, and cut to `limit` groups.
        Only then are the groups joined with vehicles, so a group whose vehicle
        no longer exists is dropped and fewer than `limit` rows can come back.
        """
        total_bookings = func.count(Booking.id).label("totalBookings")
        last_booking_at = func.max(Booking.createdAt).label("lastBookingAt")

        groups = db.query(Booking.vehicleId.label("vehicleId"), total_bookings, last_booking_at)\
                   .group_by(Booking.vehicleId)\
                   .order_by(total_bookings.desc(), last_booking_at.desc(), Booking.vehicleId.asc())\
                   .limit(limit)\
                   .subquery()

        rows = db.query(Vehicle, groups.c.totalBookings, groups.c.lastBookingAt)\
                 .join(groups, Vehicle.id == groups.c.vehicleId)\
                 .order_by(groups.c.totalBookings.desc(), groups.c.lastBookingAt.desc(),
                           groups.c.vehicleId.asc())\
                 .all()

        return [{
            "_id":           str(v.id),
            "vehicleName":   v.vehicleName,
            "category":      v.category,
            "pricePerDay":   v.pricePerDay,
            "location":      v.location,
            "coverImage":    v.coverImage,
            "availability":  v.availability,
            "userEmail":     v.userEmail,
            "totalBookings": total,
            "lastBookingAt": iso(last),
        } for v, total, last in rows]


stats_service = StatsService()
