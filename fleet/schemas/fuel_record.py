from datetime import date
from pydantic import BaseModel, field_validator, model_validator
from typing import Optional
from fleet.models.vehicle import FuelType
from fleet.models.fuel_record import PaymentMethod
from fleet.models.bulk_account import BulkAccountStatus


class FuelRecordCreateRequest(BaseModel):
    vehicle_id:       str
    driver_id:        Optional[str] = None
    fuel_type:        FuelType = FuelType.DIESEL
    quantity:         float
    cost_per_liter:   float
    odometer_reading: Optional[int] = None
    date:             date
    fuel_station:     Optional[str] = None
    receipt_number:   Optional[str] = None
    payment_method:   PaymentMethod = PaymentMethod.CASH
    bulk_account_id:  Optional[str] = None
    notes:            Optional[str] = None

    @field_validator("quantity")
    @classmethod
    def check_quantity(cls, v):
        if v <= 0: raise ValueError("Quantity must be greater than 0")
        return v

    @field_validator("cost_per_liter")
    @classmethod
    def check_price(cls, v):
        if v < 0: raise ValueError("Cost per liter cannot be negative")
        return v

    @field_validator("odometer_reading")
    @classmethod
    def check_odometer(cls, v):
        if v is not None and v < 0: raise ValueError("Odometer cannot be negative")
        return v

    @model_validator(mode="after")
    def check_payment(self) -> "FuelRecordCreateRequest":
        if self.payment_method == PaymentMethod.BULK_ACCOUNT:
            if not self.bulk_account_id:
                raise ValueError("bulk_account_id is required when paying from a bulk account")
        else:
            self.bulk_account_id = None
        return self

    @property
    def total_cost(self) -> float:
        return round(self.quantity * self.cost_per_liter, 2)


class BulkAccountCreateRequest(BaseModel):
    account_name:    str
    supplier_name:   str
    account_number:  str
    initial_balance: float
    credit_limit:    float = 0
    contact_person:  Optional[str] = None
    contact_phone:   Optional[str] = None
    contact_email:   Optional[str] = None
    fuel_types:      Optional[str] = None
    status:          BulkAccountStatus = BulkAccountStatus.ACTIVE

    @field_validator("account_name", "supplier_name", "account_number")
    @classmethod
    def check_not_blank(cls, v):
        if not v.strip(): raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("initial_balance", "credit_limit")
    @classmethod
    def check_amount(cls, v):
        if v < 0: raise ValueError("Amount cannot be negative")
        return v


class DepositRequest(BaseModel):
    amount: float
    note:   Optional[str] = None

    @field_validator("amount")
    @classmethod
    def check_amount(cls, v):
        if v <= 0: raise ValueError("Deposit amount must be greater than 0")
        return v
