import enum
from sqlalchemy import Column, Integer, String, Text, Date, TIMESTAMP, JSON
from fleet.database import Base


class VehicleStatus(str, enum.Enum):
    ACTIVE      = "active"
    INACTIVE    = "inactive"
    MAINTENANCE = "maintenance"
    RETIRED     = "retired"


class FuelType(str, enum.Enum):
    PETROL   = "petrol"
    DIESEL   = "diesel"
    ELECTRIC = "electric"
    HYBRID   = "hybrid"


class Vehicle(Base):
    __tablename__ = "vehicles"

    id                  = Column(String(64), primary_key=True)
    registration_number = Column(String(30), unique=True, nullable=False, index=True)
    make                = Column(String(100), nullable=False)
    model               = Column(String(100), nullable=False)
    year                = Column(Integer, nullable=False)
    engine_number       = Column(String(100), nullable=True)
    chassis_number      = Column(String(100), nullable=True)
    acquisition_date    = Column(Date, nullable=True)
    status              = Column(String(20), default=VehicleStatus.ACTIVE.value, nullable=False, index=True)
    department          = Column(String(150), nullable=True)
    location            = Column(String(150), nullable=True)
    color               = Column(String(50), nullable=True)
    fuel_type           = Column(String(20), nullable=False)
    seating_capacity    = Column(Integer, nullable=True)
    equipment           = Column(JSON, nullable=False, default=list)
    notes               = Column(Text, nullable=True)
    created_at          = Column(TIMESTAMP(timezone=True), nullable=False, index=True)
    updated_at          = Column(TIMESTAMP(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Vehicle id={self.id} registration={self.registration_number}>"
