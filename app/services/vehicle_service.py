import logging
from sqlalchemy.orm import Session

from app.config import settings
from app.database import utcnow
from app.models.vehicle import Vehicle
from app.schemas.auth import VerifiedIdentity
from app.schemas.common import UpdateResult, DeleteResult, iso
from app.schemas.vehicle import VehicleCreateRequest, VehicleUpdateRequest, VehicleFilterParams
from app.services.ownership import get_owned_vehicle
from app.services.vehicle_query import build_vehicle_query
from app.utils.exceptions import NotFoundException
from app.utils.ids import parse_id

logger = logging.getLogger(__name__)


def serialize_vehicle(v: Vehicle) -> dict:
    return {
        "_id":          str(v.id),
        "vehicleName":  v.vehicleName,
        "owner":        v.owner,
        "category":     v.category,
        "pricePerDay":  v.pricePerDay,
        "location":     v.location,
        "availability": v.availability,
        "description":  v.description,
        "coverImage":   v.coverImage,
        "userEmail":    v.userEmail,
        "createdAt":    iso(v.createdAt),
        "updatedAt":    iso(v.updatedAt),
    }


class VehicleService:

    def list_vehicles(self, db: Session, params: VehicleFilterParams) -> list[dict]:
        return [serialize_vehicle(v) for v in build_vehicle_query(db, params).all()]

    def latest_vehicles(self, db: Session) -> list[dict]:
        items = db.query(Vehicle).order_by(Vehicle.createdAt.desc(), Vehicle.id.asc())\
                  .limit(settings.LATEST_VEHICLES_LIMIT).all()
        return [serialize_vehicle(v) for v in items]

    def get_vehicle(self, db: Session, vehicle_id: str) -> dict:
        v = db.query(Vehicle).filter(Vehicle.id == parse_id(vehicle_id)).first()
        if not v:
            raise NotFoundException("Vehicle")
        return serialize_vehicle(v)

    def create_vehicle(self, db: Session, data: VehicleCreateRequest, identity: VerifiedIdentity) -> dict:
        now = utcnow()
        vehicle = Vehicle(
            **data.model_dump(),
            userEmail=identity.email,
            createdAt=now,
            updatedAt=now,
        )
        db.add(vehicle)
        db.commit()
        logger.info(f"Vehicle {vehicle.id} created by {identity.email}")
        return {"insertedId": str(vehicle.id), **serialize_vehicle(vehicle)}

    def update_vehicle(
        self, db: Session, vehicle_id: str, data: VehicleUpdateRequest, identity: VerifiedIdentity,
    ) -> dict:
        vid = parse_id(vehicle_id)
        get_owned_vehicle(db, vid, identity)

        values = data.changes()
        values["updatedAt"] = utcnow()
        matched = db.query(Vehicle).filter(Vehicle.id == vid).update(values)
        db.commit()
        logger.info(f"Vehicle {vid} updated by {identity.email}: {sorted(values)}")
        return UpdateResult(matchedCount=matched, modifiedCount=matched).model_dump()

    def delete_vehicle(self, db: Session, vehicle_id: str, identity: VerifiedIdentity) -> dict:
        vid = parse_id(vehicle_id)
        get_owned_vehicle(db, vid, identity)

        deleted = db.query(Vehicle).filter(Vehicle.id == vid).delete()
        db.commit()
        logger.info(f"Vehicle {vid} deleted by {identity.email}")
        return DeleteResult(deletedCount=deleted).model_dump()


vehicle_service = VehicleService()
