import enum
from sqlalchemy import Column, Integer, String, Text, Date, TIMESTAMP, Numeric, ForeignKey
from fleet.database import Base


class PaymentMethod(str, enum.Enum):
    CASH         = "cash"
    BULK_ACCOUNT = "bulk-account"
    CREDIT       = "credit"


class FuelRecord(Base):
    __tablename__ = "fuel_records"

    id               = Column(String(64), primary_key=True)
    vehicle_id       = Column(String(64), ForeignKey("vehicles.id"), nullable=False, index=True)
    driver_id        = Column(String(64), ForeignKey("drivers.id"), nullable=True, index=True)
    fuel_type        = Column(String(20), nullable=False)
    quantity         = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    cost_per_liter   = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    total_cost       = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    odometer_reading = Column(Integer, nullable=True)
    date             = Column(Date, nullable=False)
    fuel_station     = Column(String(150), nullable=True)
    receipt_number   = Column(String(100), nullable=True)
    payment_method   = Column(String(20), default=PaymentMethod.CASH.value, nullable=False)
    bulk_account_id  = Column(String(64), ForeignKey("bulk_accounts.id"), nullable=True)
    notes            = Column(Text, nullable=True)
    created_at       = Column(TIMESTAMP(timezone=True), nullable=False, index=True)
    updated_at       = Column(TIMESTAMP(timezone=True), nullable=False)

    def __repr__(self):
        return f"<FuelRecord id={self.id} vehicle={self.vehicle_id} total={self.total_cost}>"
