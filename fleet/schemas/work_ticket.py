from datetime import date
from pydantic import BaseModel, field_validator, model_validator
from typing import Optional


class WorkTicketCreateRequest(BaseModel):
    driver_id:          str
    vehicle_id:         str
    destination:        str
    purpose:            str
    fuel_required:      float
    estimated_distance: float = 0
    departure_date:     Optional[date] = None   # defaults to today
    return_date:        Optional[date] = None   # defaults to today
    additional_notes:   str = ""

    @field_validator("driver_id", "vehicle_id", "destination", "purpose")
    @classmethod
    def check_not_blank(cls, v):
        if not v.strip(): raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("fuel_required")
    @classmethod
    def check_fuel(cls, v):
        if v <= 0: raise ValueError("Fuel required must be greater than 0")
        return v

    @field_validator("estimated_distance")
    @classmethod
    def check_distance(cls, v):
        if v < 0: raise ValueError("Estimated distance cannot be negative")
        return v

    @model_validator(mode="after")
    def check_dates(self) -> "WorkTicketCreateRequest":
        if self.departure_date and self.return_date and self.return_date < self.departure_date:
            raise ValueError("return_date cannot be before departure_date")
        return self


class ApproveRequest(BaseModel):
    approved_by: Optional[str] = None   # defaults to the approver's name


class RejectRequest(BaseModel):
    reason: str

    @field_validator("reason")
    @classmethod
    def check_reason(cls, v):
        if not v.strip(): raise ValueError("Rejection reason is required")
        return v.strip()
