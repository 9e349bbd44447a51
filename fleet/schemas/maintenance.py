from datetime import date
from pydantic import BaseModel, field_validator
from typing import Optional
from fleet.models.maintenance_record import MaintenanceType, MaintenanceStatus, Priority


class MaintenanceCreateRequest(BaseModel):
    vehicle_id:           str
    maintenance_type:     MaintenanceType
    service_provider:     Optional[str] = None
    description:          str
    parts_replaced:       list[str] = []
    labor_cost:           float = 0
    parts_cost:           float = 0
    odometer_reading:     Optional[int] = None
    service_date:         date
    next_service_date:    Optional[date] = None
    next_service_mileage: Optional[int] = None
    status:               MaintenanceStatus = MaintenanceStatus.SCHEDULED
    priority:             Priority = Priority.MEDIUM
    warranty_info:        Optional[str] = None
    notes:                Optional[str] = None

    @field_validator("description")
    @classmethod
    def check_description(cls, v):
        if not v.strip(): raise ValueError("Description cannot be empty")
        return v.strip()

    @field_validator("labor_cost", "parts_cost")
    @classmethod
    def check_cost(cls, v):
        if v < 0: raise ValueError("Cost cannot be negative")
        return v


class MaintenanceUpdateRequest(BaseModel):
    maintenance_type:     Optional[MaintenanceType] = None
    service_provider:     Optional[str] = None
    description:          Optional[str] = None
    parts_replaced:       Optional[list[str]] = None
    labor_cost:           Optional[float] = None
    parts_cost:           Optional[float] = None
    odometer_reading:     Optional[int] = None
    service_date:         Optional[date] = None
    next_service_date:    Optional[date] = None
    next_service_mileage: Optional[int] = None
    status:               Optional[MaintenanceStatus] = None
    priority:             Optional[Priority] = None
    warranty_info:        Optional[str] = None
    notes:                Optional[str] = None

    @field_validator("labor_cost", "parts_cost")
    @classmethod
    def check_cost(cls, v):
        if v is not None and v < 0: raise ValueError("Cost cannot be negative")
        return v
