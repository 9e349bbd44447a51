import enum
from sqlalchemy import Column, String, Text, Date, TIMESTAMP
from fleet.database import Base


class DriverStatus(str, enum.Enum):
    ACTIVE    = "active"
    INACTIVE  = "inactive"
    SUSPENDED = "suspended"


class LicenseClass(str, enum.Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class Driver(Base):
    __tablename__ = "drivers"

    id                  = Column(String(64), primary_key=True)
    name                = Column(String(150), nullable=False)
    employee_id         = Column(String(50), unique=True, nullable=False, index=True)
    license_number      = Column(String(100), nullable=False)
    license_class       = Column(String(5), nullable=False)
    license_expiry_date = Column(Date, nullable=True)
    phone               = Column(String(30), nullable=True)
    email               = Column(String(255), nullable=True, index=True)
    department          = Column(String(150), nullable=True)
    status              = Column(String(20), default=DriverStatus.ACTIVE.value, nullable=False)
    username            = Column(String(100), unique=True, nullable=True, index=True)
    password_hash       = Column(String(255), nullable=True)
    date_joined         = Column(Date, nullable=True)
    notes               = Column(Text, nullable=True)
    created_at          = Column(TIMESTAMP(timezone=True), nullable=False, index=True)
    updated_at          = Column(TIMESTAMP(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Driver id={self.id} username={self.username} status={self.status}>"
