import enum
from sqlalchemy import Column, Integer, String, Text, Date, TIMESTAMP, Numeric, ForeignKey
from fleet.database import Base


class ComponentType(str, enum.Enum):
    TIRE    = "tire"
    BATTERY = "battery"


class TirePosition(str, enum.Enum):
    FRONT_LEFT  = "front-left"
    FRONT_RIGHT = "front-right"
    REAR_LEFT   = "rear-left"
    REAR_RIGHT  = "rear-right"
    SPARE       = "spare"


class ComponentStatus(str, enum.Enum):
    ACTIVE   = "active"
    REMOVED  = "removed"
    REPLACED = "replaced"


class Component(Base):
    __tablename__ = "components"

    id                   = Column(String(64), primary_key=True)
    vehicle_id           = Column(String(64), ForeignKey("vehicles.id"), nullable=False, index=True)
    component_type       = Column(String(20), nullable=False, index=True)
    make                 = Column(String(100), nullable=False)
    model                = Column(String(100), nullable=True)
    serial_number        = Column(String(100), nullable=False, index=True)
    position             = Column(String(20), nullable=True)   # tires only
    installation_date    = Column(Date, nullable=False)
    installation_mileage = Column(Integer, nullable=False, default=0)
    removal_date         = Column(Date, nullable=True)
    removal_mileage      = Column(Integer, nullable=True)
    status               = Column(String(20), default=ComponentStatus.ACTIVE.value, nullable=False)
    warranty_months      = Column(Integer, nullable=True)
    purchase_cost        = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    supplier             = Column(String(150), nullable=True)
    notes                = Column(Text, nullable=True)
    created_at           = Column(TIMESTAMP(timezone=True), nullable=False, index=True)
    updated_at           = Column(TIMESTAMP(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Component id={self.id} type={self.component_type} vehicle={self.vehicle_id}>"
