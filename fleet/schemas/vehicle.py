from datetime import date
from pydantic import BaseModel, field_validator
from typing import Optional
from fleet.models.vehicle import VehicleStatus, FuelType


class VehicleCreateRequest(BaseModel):
    registration_number: str
    make:                str
    model:               str
    year:                int
    engine_number:       Optional[str] = None
    chassis_number:      Optional[str] = None
    acquisition_date:    Optional[date] = None
    status:              VehicleStatus = VehicleStatus.ACTIVE
    department:          Optional[str] = None
    location:            Optional[str] = None
    color:               Optional[str] = None
    fuel_type:           FuelType = FuelType.DIESEL
    seating_capacity:    Optional[int] = None
    equipment:           list[str] = []
    notes:               Optional[str] = None

    @field_validator("year")
    @classmethod
    def check_year(cls, v):
        if not (1900 <= v <= 2100): raise ValueError("Year must be between 1900 and 2100")
        return v

    @field_validator("seating_capacity")
    @classmethod
    def check_capacity(cls, v):
        if v is not None and v <= 0: raise ValueError("Seating capacity must be greater than 0")
        return v

    @field_validator("registration_number")
    @classmethod
    def check_registration(cls, v):
        if not v.strip(): raise ValueError("Registration number cannot be empty")
        return v.strip().upper()

    @field_validator("make", "model")
    @classmethod
    def check_not_blank(cls, v):
        if not v.strip(): raise ValueError("Field cannot be empty")
        return v.strip()


class VehicleUpdateRequest(BaseModel):
    registration_number: Optional[str] = None
    make:                Optional[str] = None
    model:               Optional[str] = None
    year:                Optional[int] = None
    engine_number:       Optional[str] = None
    chassis_number:      Optional[str] = None
    acquisition_date:    Optional[date] = None
    department:          Optional[str] = None
    location:            Optional[str] = None
    color:               Optional[str] = None
    fuel_type:           Optional[FuelType] = None
    seating_capacity:    Optional[int] = None
    equipment:           Optional[list[str]] = None
    notes:               Optional[str] = None

    @field_validator("registration_number")
    @classmethod
    def check_registration(cls, v):
        if v is None: return v
        if not v.strip(): raise ValueError("Registration number cannot be empty")
        return v.strip().upper()


class VehicleStatusRequest(BaseModel):
    status: VehicleStatus
    reason: Optional[str] = None
