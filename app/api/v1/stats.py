from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.config import settings
from app.database import get_db
from app.schemas.vehicle import MAX_QUERY_LIMIT
from app.services.stats_service import stats_service

router = APIRouter(prefix="/stats")


def _top_limit(raw: Optional[str]) -> int:
    # Anything that is not an integer in 1..MAX_QUERY_LIMIT falls back to the default
    try:
        limit = int(raw) if raw is not None else 0
    except ValueError:
        limit = 0
    if limit <= 0 or limit > MAX_QUERY_LIMIT:
        return settings.TOP_VEHICLES_DEFAULT_LIMIT
    return limit


@router.get("/top-vehicles", summary="Most-booked vehicles")
def top_vehicles(
    limit: Optional[str] = Query(None, description="Number of vehicles (default 3)"),
    db:    Session       = Depends(get_db),
):
    return stats_service.top_vehicles(db, _top_limit(limit))
