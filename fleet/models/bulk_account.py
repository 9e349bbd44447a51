import enum
from sqlalchemy import Column, String, TIMESTAMP, Numeric
from fleet.database import Base


class BulkAccountStatus(str, enum.Enum):
    ACTIVE    = "active"
    INACTIVE  = "inactive"
    SUSPENDED = "suspended"


class BulkAccount(Base):
    __tablename__ = "bulk_accounts"

    id              = Column(String(64), primary_key=True)
    account_name    = Column(String(150), nullable=False)
    supplier_name   = Column(String(150), nullable=False)
    account_number  = Column(String(100), unique=True, nullable=False)
    current_balance = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    initial_balance = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    credit_limit    = Column(Numeric(14, 2, asdecimal=False), nullable=False, default=0)
    status          = Column(String(20), default=BulkAccountStatus.ACTIVE.value, nullable=False)
    contact_person  = Column(String(150), nullable=True)
    contact_phone   = Column(String(30), nullable=True)
    contact_email   = Column(String(255), nullable=True)
    fuel_types      = Column(String(100), nullable=True)   # comma separated
    created_at      = Column(TIMESTAMP(timezone=True), nullable=False, index=True)
    updated_at      = Column(TIMESTAMP(timezone=True), nullable=False)

    def __repr__(self):
        return f"<BulkAccount id={self.id} balance={self.current_balance}>"
