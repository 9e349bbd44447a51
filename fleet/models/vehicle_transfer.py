from sqlalchemy import Column, Integer, String, Text, Date, TIMESTAMP, ForeignKey
from fleet.database import Base


class VehicleTransfer(Base):
    __tablename__ = "transfers"

    id              = Column(String(64), primary_key=True)
    vehicle_id      = Column(String(64), ForeignKey("vehicles.id"), nullable=False, index=True)
    # from_* are the vehicle's department/location when the transfer was recorded
    from_department = Column(String(150), nullable=True)
    to_department   = Column(String(150), nullable=False)
    from_location   = Column(String(150), nullable=True)
    to_location     = Column(String(150), nullable=False)
    transfer_date   = Column(Date, nullable=False)
    mileage         = Column(Integer, nullable=False, default=0)
    authorized_by   = Column(String(150), nullable=False)
    received_by     = Column(String(150), nullable=True)
    reason          = Column(Text, nullable=True)
    notes           = Column(Text, nullable=True)
    created_at      = Column(TIMESTAMP(timezone=True), nullable=False, index=True)
    updated_at      = Column(TIMESTAMP(timezone=True), nullable=False)

    def __repr__(self):
        return f"<VehicleTransfer id={self.id} vehicle={self.vehicle_id} to={self.to_department}>"
