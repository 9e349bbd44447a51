from datetime import date
from pydantic import BaseModel, field_validator
from typing import Optional


class TransferCreateRequest(BaseModel):
    vehicle_id:      str
    # Defaults to the vehicle's current department/location when omitted
    from_department: Optional[str] = None
    from_location:   Optional[str] = None
    to_department:   str
    to_location:     str
    transfer_date:   Optional[date] = None
    mileage:         int = 0
    authorized_by:   str
    received_by:     Optional[str] = None
    reason:          str = ""
    notes:           str = ""

    @field_validator("to_department", "to_location", "authorized_by")
    @classmethod
    def not_blank(cls, v):
        if not v.strip(): raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("mileage")
    @classmethod
    def check_mileage(cls, v):
        if v < 0: raise ValueError("Mileage cannot be negative")
        return v
