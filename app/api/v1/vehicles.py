from fastapi import APIRouter, Depends, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.dependencies import get_verified_identity
from app.schemas.auth import VerifiedIdentity
from app.schemas.common import items_response, AUTH_RESPONSES, ErrorResponse
from app.schemas.vehicle import (
    VehicleCreateRequest, VehicleUpdateRequest, VehicleFilterParams,
    SortField, SortOrder, MAX_QUERY_LIMIT,
)
from app.services.vehicle_service import vehicle_service

router = APIRouter()


def vehicle_filter_params(
    category:  Optional[str] = Query(None, description="Exact category match"),
    location:  Optional[str] = Query(None, description="Case-insensitive substring"),
    minPrice:  Optional[str] = Query(None, description="Lowest pricePerDay (inclusive)"),
    maxPrice:  Optional[str] = Query(None, description="Highest pricePerDay (inclusive)"),
    userEmail: Optional[str] = Query(None, description="Listings created by this email"),
    sortBy:    SortField     = Query(SortField.CREATED_AT),
    sortOrder: SortOrder     = Query(SortOrder.DESC),
    limit:     Optional[str] = Query(None, description=f"Positive integer up to {MAX_QUERY_LIMIT}"),
) -> VehicleFilterParams:
    # Numbers arrive as raw strings so a blank value means "absent", not 400
    try:
        return VehicleFilterParams(
            category=category, location=location,
            minPrice=minPrice, maxPrice=maxPrice,
            userEmail=userEmail,
            sortBy=sortBy, sortOrder=sortOrder,
            limit=limit,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))


@router.get("/vehicles", summary="Browse vehicles (filter / sort / limit)")
def list_vehicles(
    params: VehicleFilterParams = Depends(vehicle_filter_params),
    db:     Session             = Depends(get_db),
):
    return items_response(vehicle_service.list_vehicles(db, params))


@router.get("/latest-vehicles", summary="Newest listings for the home page")
def latest_vehicles(db: Session = Depends(get_db)):
    return vehicle_service.latest_vehicles(db)


@router.get("/vehicles/{vehicle_id}", summary="Get vehicle by ID",
            responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})
def get_vehicle(vehicle_id: str, db: Session = Depends(get_db)):
    return vehicle_service.get_vehicle(db, vehicle_id)


@router.post("/vehicles", status_code=status.HTTP_201_CREATED, summary="List a vehicle",
             responses=AUTH_RESPONSES)
def create_vehicle(
    body:     VehicleCreateRequest,
    db:       Session          = Depends(get_db),
    identity: VerifiedIdentity = Depends(get_verified_identity),
):
    return vehicle_service.create_vehicle(db, body, identity)


@router.patch("/vehicles/{vehicle_id}", summary="Update own vehicle", responses=AUTH_RESPONSES)
def update_vehicle(
    vehicle_id: str,
    body:       VehicleUpdateRequest,
    db:         Session          = Depends(get_db),
    identity:   VerifiedIdentity = Depends(get_verified_identity),
):
    return vehicle_service.update_vehicle(db, vehicle_id, body, identity)


@router.delete("/vehicles/{vehicle_id}", summary="Delete own vehicle", responses=AUTH_RESPONSES)
def delete_vehicle(
    vehicle_id: str,
    db:         Session          = Depends(get_db),
    identity:   VerifiedIdentity = Depends(get_verified_identity),
):
    return vehicle_service.delete_vehicle(db, vehicle_id, identity)
