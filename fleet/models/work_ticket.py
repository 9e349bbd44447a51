import enum
from sqlalchemy import Column, String, Text, Date, TIMESTAMP, Numeric, ForeignKey
from fleet.database import Base


class WorkTicketStatus(str, enum.Enum):
    PENDING   = "pending"
    APPROVED  = "approved"
    REJECTED  = "rejected"
    COMPLETED = "completed"   # modelled, but no transition enters it


class WorkTicket(Base):
    __tablename__ = "work_tickets"

    id                   = Column(String(64), primary_key=True)
    driver_id            = Column(String(64), ForeignKey("drivers.id"), nullable=True, index=True)
    # Snapshot of the driver/vehicle at creation time, never re-synced
    driver_name          = Column(String(150), nullable=True)
    driver_license       = Column(String(100), nullable=True)
    driver_email         = Column(String(255), nullable=True)
    vehicle_id           = Column(String(64), ForeignKey("vehicles.id"), nullable=False, index=True)
    vehicle_registration = Column(String(30), nullable=True)
    destination          = Column(String(255), nullable=False)
    purpose              = Column(Text, nullable=False)
    fuel_required        = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    estimated_distance   = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    departure_date       = Column(Date, nullable=False)
    return_date          = Column(Date, nullable=False)
    additional_notes     = Column(Text, nullable=True)
    status               = Column(String(20), default=WorkTicketStatus.PENDING.value, nullable=False, index=True)
    approved_by          = Column(String(150), nullable=True)
    approved_at          = Column(TIMESTAMP(timezone=True), nullable=True)
    rejected_by          = Column(String(150), nullable=True)
    rejected_at          = Column(TIMESTAMP(timezone=True), nullable=True)
    rejection_reason     = Column(Text, nullable=True)
    created_at           = Column(TIMESTAMP(timezone=True), nullable=False, index=True)
    updated_at           = Column(TIMESTAMP(timezone=True), nullable=False)

    def __repr__(self):
        return f"<WorkTicket id={self.id} status={self.status} driver={self.driver_id}>"
