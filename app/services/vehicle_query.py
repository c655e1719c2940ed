"""
Vehicle discovery query construction.

Translates a validated VehicleFilterParams into a SQLAlchemy query over the
vehicles table. Each active option adds one predicate, so the result set is
exactly the rows matching the conjunction of the options given.
"""
from sqlalchemy import asc, desc
from sqlalchemy.orm import Query, Session

from app.models.vehicle import Vehicle
from app.schemas.vehicle import SortField, SortOrder, VehicleFilterParams


SORT_COLUMNS = {
    SortField.CREATED_AT:   Vehicle.createdAt,
    SortField.UPDATED_AT:   Vehicle.updatedAt,
    SortField.PRICE:        Vehicle.pricePerDay,
    SortField.NAME:         Vehicle.vehicleName,
    SortField.CATEGORY:     Vehicle.category,
    SortField.LOCATION:     Vehicle.location,
    SortField.AVAILABILITY: Vehicle.availability,
    SortField.OWNER:        Vehicle.owner,
}


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def apply_filters(q: Query, params: VehicleFilterParams) -> Query:
    if params.category:
        q = q.filter(Vehicle.category == params.category)
    if params.location:
        q = q.filter(Vehicle.location.ilike(_like_pattern(params.location), escape="\\"))
    if params.userEmail:
        q = q.filter(Vehicle.userEmail == params.userEmail)
    # An inverted range is allowed through and simply matches nothing
    if params.minPrice is not None:
        q = q.filter(Vehicle.pricePerDay >= params.minPrice)
    if params.maxPrice is not None:
        q = q.filter(Vehicle.pricePerDay <= params.maxPrice)
    return q


def apply_sort(q: Query, params: VehicleFilterParams) -> Query:
    direction = asc if params.sortOrder == SortOrder.ASC else desc
    # id breaks ties so equal sort keys still come back in a stable order
    return q.order_by(direction(SORT_COLUMNS[params.sortBy]), Vehicle.id.asc())


def build_vehicle_query(db: Session, params: VehicleFilterParams) -> Query:
    q = apply_sort(apply_filters(db.query(Vehicle), params), params)
    if params.limit:
        q = q.limit(params.limit)
    return q
