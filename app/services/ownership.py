import logging
import uuid

from sqlalchemy.orm import Session

from app.models.vehicle import Vehicle
from app.schemas.auth import VerifiedIdentity
from app.utils.exceptions import NotFoundException, ForbiddenException

logger = logging.getLogger(__name__)


def get_owned_vehicle(db: Session, vehicle_id: uuid.UUID, identity: VerifiedIdentity) -> Vehicle:
    """
    Load a vehicle the caller is allowed to mutate.

    Raises NotFoundException when the vehicle does not exist and
    ForbiddenException when it was created by a different identity. Must be
    called before the update/delete statement runs.
    """
    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
    if not vehicle:
        raise NotFoundException("Vehicle")

    if vehicle.userEmail != identity.email:
        logger.warning(f"Ownership check denied {identity.email} on vehicle {vehicle_id}")
        raise ForbiddenException()

    return vehicle
