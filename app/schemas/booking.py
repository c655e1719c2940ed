from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from datetime import date


class BookingCreateRequest(BaseModel):
    # Renter identity comes from the verified token, never from the body
    vehicleId:  str
    startDate:  Optional[date] = None
    endDate:    Optional[date] = None
    totalPrice: float = Field(0, ge=0)

    @field_validator("vehicleId")
    @classmethod
    def check_vehicle_id(cls, v):
        if not v.strip(): raise ValueError("vehicleId required")
        return v.strip()

    @model_validator(mode="after")
    def check_dates(self) -> "BookingCreateRequest":
        if self.startDate and self.endDate and self.endDate < self.startDate:
            raise ValueError("endDate must not be before startDate")
        return self
