from datetime import date
from pydantic import BaseModel, field_validator
from typing import Optional
from fleet.models.driver import DriverStatus, LicenseClass


class DriverCreateRequest(BaseModel):
    name:                str
    employee_id:         str
    license_number:      str
    license_class:       LicenseClass = LicenseClass.B
    license_expiry_date: Optional[date] = None
    phone:               Optional[str] = None
    email:               Optional[str] = None
    department:          Optional[str] = None
    status:              DriverStatus = DriverStatus.ACTIVE
    username:            str
    password:            str
    date_joined:         Optional[date] = None
    notes:               Optional[str] = None

    @field_validator("name", "employee_id", "license_number", "username")
    @classmethod
    def check_not_blank(cls, v):
        if not v.strip(): raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        if len(v) < 6: raise ValueError("Password must be at least 6 characters")
        return v


class DriverUpdateRequest(BaseModel):
    name:                Optional[str] = None
    license_number:      Optional[str] = None
    license_class:       Optional[LicenseClass] = None
    license_expiry_date: Optional[date] = None
    phone:               Optional[str] = None
    email:               Optional[str] = None
    department:          Optional[str] = None
    status:              Optional[DriverStatus] = None
    password:            Optional[str] = None
    notes:               Optional[str] = None

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        if v is not None and len(v) < 6: raise ValueError("Password must be at least 6 characters")
        return v
