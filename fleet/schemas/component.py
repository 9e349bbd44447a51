from datetime import date
from pydantic import BaseModel, field_validator, model_validator
from typing import Optional
from fleet.models.component import ComponentType, ComponentStatus, TirePosition


class ComponentCreateRequest(BaseModel):
    vehicle_id:           str
    component_type:       ComponentType
    make:                 str
    model:                Optional[str] = None
    serial_number:        str
    position:             Optional[TirePosition] = None
    installation_date:    date
    installation_mileage: int = 0
    warranty_months:      Optional[int] = None
    purchase_cost:        float = 0
    supplier:             Optional[str] = None
    notes:                str = ""

    @field_validator("make", "serial_number")
    @classmethod
    def not_blank(cls, v):
        if not v.strip(): raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("installation_mileage", "warranty_months")
    @classmethod
    def check_non_negative(cls, v):
        if v is not None and v < 0: raise ValueError("Value cannot be negative")
        return v

    @field_validator("purchase_cost")
    @classmethod
    def check_cost(cls, v):
        if v < 0: raise ValueError("Cost cannot be negative")
        return v

    @model_validator(mode="after")
    def check_position(self):
        if self.component_type == ComponentType.BATTERY and self.position is not None:
            raise ValueError("Only tires have a position")
        return self


class ComponentUpdateRequest(BaseModel):
    make:            Optional[str] = None
    model:           Optional[str] = None
    position:        Optional[TirePosition] = None
    warranty_months: Optional[int] = None
    purchase_cost:   Optional[float] = None
    supplier:        Optional[str] = None
    notes:           Optional[str] = None


class ComponentRemovalRequest(BaseModel):
    """Take a component off its vehicle. `replaced` means a new part went in its place."""
    status:          ComponentStatus = ComponentStatus.REMOVED
    removal_date:    Optional[date] = None
    removal_mileage: Optional[int] = None
    notes:           Optional[str] = None

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        if v == ComponentStatus.ACTIVE: raise ValueError("Status must be 'removed' or 'replaced'")
        return v
