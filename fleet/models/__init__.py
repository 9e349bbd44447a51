"""
Import all models here so that:
1. Alembic can auto-detect them when generating migrations
2. The remote gateway can map every collection to its table

Order matters: import parent tables before child tables.
"""

from fleet.models.vehicle import Vehicle, VehicleStatus, FuelType
from fleet.models.driver import Driver, DriverStatus, LicenseClass
from fleet.models.bulk_account import BulkAccount, BulkAccountStatus
from fleet.models.work_ticket import WorkTicket, WorkTicketStatus
from fleet.models.fuel_record import FuelRecord, PaymentMethod
from fleet.models.maintenance_record import (
    MaintenanceRecord, MaintenanceType, MaintenanceStatus, Priority,
)
from fleet.models.component import Component, ComponentType, ComponentStatus, TirePosition
from fleet.models.vehicle_transfer import VehicleTransfer

__all__ = [
    "Vehicle",
    "VehicleStatus",
    "FuelType",
    "Driver",
    "DriverStatus",
    "LicenseClass",
    "BulkAccount",
    "BulkAccountStatus",
    "WorkTicket",
    "WorkTicketStatus",
    "FuelRecord",
    "PaymentMethod",
    "MaintenanceRecord",
    "MaintenanceType",
    "MaintenanceStatus",
    "Priority",
    "Component",
    "ComponentType",
    "ComponentStatus",
    "TirePosition",
    "VehicleTransfer",
]
