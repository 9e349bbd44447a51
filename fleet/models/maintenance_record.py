import enum
from sqlalchemy import Column, Integer, String, Text, Date, TIMESTAMP, Numeric, ForeignKey, JSON
from fleet.database import Base


class MaintenanceType(str, enum.Enum):
    ROUTINE    = "routine"
    REPAIR     = "repair"
    EMERGENCY  = "emergency"
    INSPECTION = "inspection"


class MaintenanceStatus(str, enum.Enum):
    SCHEDULED   = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED   = "completed"
    CANCELLED   = "cancelled"


class Priority(str, enum.Enum):
    LOW      = "low"
    MEDIUM   = "medium"
    HIGH     = "high"
    CRITICAL = "critical"


class MaintenanceRecord(Base):
    __tablename__ = "maintenance_records"

    id                   = Column(String(64), primary_key=True)
    vehicle_id           = Column(String(64), ForeignKey("vehicles.id"), nullable=False, index=True)
    maintenance_type     = Column(String(20), nullable=False)
    service_provider     = Column(String(150), nullable=True)
    description          = Column(Text, nullable=False)
    parts_replaced       = Column(JSON, nullable=False, default=list)
    labor_cost           = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    parts_cost           = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    cost                 = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)  # labor + parts
    odometer_reading     = Column(Integer, nullable=True)
    service_date         = Column(Date, nullable=False)
    next_service_date    = Column(Date, nullable=True)
    next_service_mileage = Column(Integer, nullable=True)
    status               = Column(String(20), default=MaintenanceStatus.SCHEDULED.value, nullable=False)
    priority             = Column(String(20), default=Priority.MEDIUM.value, nullable=False)
    warranty_info        = Column(Text, nullable=True)
    notes                = Column(Text, nullable=True)
    created_at           = Column(TIMESTAMP(timezone=True), nullable=False, index=True)
    updated_at           = Column(TIMESTAMP(timezone=True), nullable=False)

    def __repr__(self):
        return f"<MaintenanceRecord id={self.id} vehicle={self.vehicle_id} cost={self.cost}>"
