import enum
from pydantic import BaseModel, Field, field_validator
from typing import Optional

from app.models.vehicle import DEFAULT_AVAILABILITY


class SortField(str, enum.Enum):
    CREATED_AT   = "createdAt"
    UPDATED_AT   = "updatedAt"
    PRICE        = "pricePerDay"
    NAME         = "vehicleName"
    CATEGORY     = "category"
    LOCATION     = "location"
    AVAILABILITY = "availability"
    OWNER        = "owner"


class SortOrder(str, enum.Enum):
    ASC  = "asc"
    DESC = "desc"


# Largest LIMIT every supported store accepts as an integer
MAX_QUERY_LIMIT = 2**31 - 1


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v.strip() if isinstance(v, str) else v


# ─── Query ────────────────────────────────────────────────────────────────────
class VehicleFilterParams(BaseModel):
    """
    Options accepted by vehicle discovery. Every option is optional and they
    combine as a conjunction; see app.services.vehicle_query.
    """
    category:  Optional[str]   = None
    location:  Optional[str]   = None
    minPrice:  Optional[float] = None
    maxPrice:  Optional[float] = None
    userEmail: Optional[str]   = None
    sortBy:    SortField       = SortField.CREATED_AT
    sortOrder: SortOrder       = SortOrder.DESC
    limit:     Optional[int]   = Field(None, ge=1, le=MAX_QUERY_LIMIT)

    @field_validator("category", "location", "userEmail", "minPrice", "maxPrice", "limit",
                     mode="before")
    @classmethod
    def blank_is_absent(cls, v): return _blank_to_none(v)


# ─── Requests ─────────────────────────────────────────────────────────────────
class VehicleCreateRequest(BaseModel):
    # No userEmail here: ownership comes from the verified token only
    vehicleName:  str
    owner:        Optional[str] = None
    category:     str
    pricePerDay:  float = Field(0, ge=0)
    location:     str
    availability: str = DEFAULT_AVAILABILITY
    description:  str = ""
    coverImage:   str = ""

    @field_validator("vehicleName", "category", "location")
    @classmethod
    def check_not_empty(cls, v, info):
        if not v.strip(): raise ValueError(f"{info.field_name} cannot be empty")
        return v.strip()

    @field_validator("availability")
    @classmethod
    def default_availability(cls, v):
        return v.strip() or DEFAULT_AVAILABILITY


class VehicleUpdateRequest(BaseModel):
    vehicleName:  Optional[str]   = None
    owner:        Optional[str]   = None
    category:     Optional[str]   = None
    pricePerDay:  Optional[float] = Field(None, ge=0)
    location:     Optional[str]   = None
    availability: Optional[str]   = None
    description:  Optional[str]   = None
    coverImage:   Optional[str]   = None

    @field_validator("vehicleName", "category", "location", "availability")
    @classmethod
    def check_not_empty(cls, v, info):
        if v is not None and not v.strip(): raise ValueError(f"{info.field_name} cannot be empty")
        return v.strip() if v else v

    def changes(self) -> dict:
        """Fields the client actually sent with a value."""
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}
