import enum
from pydantic import BaseModel, field_validator
from typing import Optional


class RoleName(str, enum.Enum):
    ADMIN  = "admin"
    DRIVER = "driver"


class LoginRequest(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def check_username(cls, v):
        if not v.strip(): raise ValueError("Username cannot be empty")
        return v.strip()


class SessionIdentity(BaseModel):
    """Identity carried in the signed access token."""
    id:       str
    email:    Optional[str] = None
    role:     RoleName
    name:     Optional[str] = None
    driverId: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == RoleName.ADMIN
