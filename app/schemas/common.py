from datetime import date, datetime
from pydantic import BaseModel
from typing import Any


# ─── Error Detail (per field) ──────────────────────────────────────────────────
class ErrorDetail(BaseModel):
    field: str
    message: str


# ─── Error Body ───────────────────────────────────────────────────────────────
class ErrorBody(BaseModel):
    code: str
    details: list[ErrorDetail] | None = None
    field: str | None = None


# ─── Error Response ───────────────────────────────────────────────────────────
class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: ErrorBody


# ─── Store Operation Results ──────────────────────────────────────────────────
class InsertResult(BaseModel):
    acknowledged: bool = True
    insertedId: str


class UpdateResult(BaseModel):
    acknowledged: bool = True
    matchedCount: int
    modifiedCount: int


class DeleteResult(BaseModel):
    acknowledged: bool = True
    deletedCount: int


class MessageResponse(BaseModel):
    message: str


# Documented on every route that needs a Bearer token
AUTH_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    403: {"model": ErrorResponse, "description": "Caller does not own the vehicle"},
    404: {"model": ErrorResponse},
}


# ─── Helper Functions ─────────────────────────────────────────────────────────
def items_response(items: list) -> dict:
    """Return the {items: [...]} envelope used by listing endpoints."""
    return {"items": items}


def iso(value: Any) -> Any:
    """ISO-8601 string for dates and datetimes, anything else unchanged."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value
