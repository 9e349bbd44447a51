"""initial fleet schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "vehicles",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("registration_number", sa.String(30), nullable=False),
        sa.Column("make", sa.String(100), nullable=False),
        sa.Column("model", sa.String(100), nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("engine_number", sa.String(100)),
        sa.Column("chassis_number", sa.String(100)),
        sa.Column("acquisition_date", sa.Date),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("department", sa.String(150)),
        sa.Column("location", sa.String(150)),
        sa.Column("color", sa.String(50)),
        sa.Column("fuel_type", sa.String(20), nullable=False),
        sa.Column("seating_capacity", sa.Integer),
        sa.Column("equipment", sa.JSON, nullable=False),
        sa.Column("notes", sa.Text),
        *_timestamps(),
    )
    op.create_index("ix_vehicles_registration_number", "vehicles", ["registration_number"], unique=True)
    op.create_index("ix_vehicles_status", "vehicles", ["status"])
    op.create_index("ix_vehicles_created_at", "vehicles", ["created_at"])

    op.create_table(
        "drivers",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("employee_id", sa.String(50), nullable=False),
        sa.Column("license_number", sa.String(100), nullable=False),
        sa.Column("license_class", sa.String(5), nullable=False),
        sa.Column("license_expiry_date", sa.Date),
        sa.Column("phone", sa.String(30)),
        sa.Column("email", sa.String(255)),
        sa.Column("department", sa.String(150)),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("username", sa.String(100)),
        sa.Column("password_hash", sa.String(255)),
        sa.Column("date_joined", sa.Date),
        sa.Column("notes", sa.Text),
        *_timestamps(),
    )
    op.create_index("ix_drivers_employee_id", "drivers", ["employee_id"], unique=True)
    op.create_index("ix_drivers_username", "drivers", ["username"], unique=True)
    op.create_index("ix_drivers_email", "drivers", ["email"])
    op.create_index("ix_drivers_created_at", "drivers", ["created_at"])

    op.create_table(
        "bulk_accounts",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("account_name", sa.String(150), nullable=False),
        sa.Column("supplier_name", sa.String(150), nullable=False),
        sa.Column("account_number", sa.String(100), nullable=False, unique=True),
        sa.Column("current_balance", sa.Numeric(14, 2), nullable=False),
        sa.Column("initial_balance", sa.Numeric(14, 2), nullable=False),
        sa.Column("credit_limit", sa.Numeric(14, 2), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("contact_person", sa.String(150)),
        sa.Column("contact_phone", sa.String(30)),
        sa.Column("contact_email", sa.String(255)),
        sa.Column("fuel_types", sa.String(100)),
        *_timestamps(),
    )
    op.create_index("ix_bulk_accounts_created_at", "bulk_accounts", ["created_at"])

    op.create_table(
        "work_tickets",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("driver_id", sa.String(64), sa.ForeignKey("drivers.id")),
        sa.Column("driver_name", sa.String(150)),
        sa.Column("driver_license", sa.String(100)),
        sa.Column("driver_email", sa.String(255)),
        sa.Column("vehicle_id", sa.String(64), sa.ForeignKey("vehicles.id"), nullable=False),
        sa.Column("vehicle_registration", sa.String(30)),
        sa.Column("destination", sa.String(255), nullable=False),
        sa.Column("purpose", sa.Text, nullable=False),
        sa.Column("fuel_required", sa.Numeric(10, 2), nullable=False),
        sa.Column("estimated_distance", sa.Numeric(10, 2), nullable=False),
        sa.Column("departure_date", sa.Date, nullable=False),
        sa.Column("return_date", sa.Date, nullable=False),
        sa.Column("additional_notes", sa.Text),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("approved_by", sa.String(150)),
        sa.Column("approved_at", sa.TIMESTAMP(timezone=True)),
        sa.Column("rejected_by", sa.String(150)),
        sa.Column("rejected_at", sa.TIMESTAMP(timezone=True)),
        sa.Column("rejection_reason", sa.Text),
        *_timestamps(),
    )
    op.create_index("ix_work_tickets_driver_id", "work_tickets", ["driver_id"])
    op.create_index("ix_work_tickets_vehicle_id", "work_tickets", ["vehicle_id"])
    op.create_index("ix_work_tickets_status", "work_tickets", ["status"])
    op.create_index("ix_work_tickets_created_at", "work_tickets", ["created_at"])

    op.create_table(
        "fuel_records",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("vehicle_id", sa.String(64), sa.ForeignKey("vehicles.id"), nullable=False),
        sa.Column("driver_id", sa.String(64), sa.ForeignKey("drivers.id")),
        sa.Column("fuel_type", sa.String(20), nullable=False),
        sa.Column("quantity", sa.Numeric(10, 2), nullable=False),
        sa.Column("cost_per_liter", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_cost", sa.Numeric(14, 2), nullable=False),
        sa.Column("odometer_reading", sa.Integer),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("fuel_station", sa.String(150)),
        sa.Column("receipt_number", sa.String(100)),
        sa.Column("payment_method", sa.String(20), nullable=False),
        sa.Column("bulk_account_id", sa.String(64), sa.ForeignKey("bulk_accounts.id")),
        sa.Column("notes", sa.Text),
        *_timestamps(),
    )
    op.create_index("ix_fuel_records_vehicle_id", "fuel_records", ["vehicle_id"])
    op.create_index("ix_fuel_records_driver_id", "fuel_records", ["driver_id"])
    op.create_index("ix_fuel_records_created_at", "fuel_records", ["created_at"])

    op.create_table(
        "maintenance_records",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("vehicle_id", sa.String(64), sa.ForeignKey("vehicles.id"), nullable=False),
        sa.Column("maintenance_type", sa.String(20), nullable=False),
        sa.Column("service_provider", sa.String(150)),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("parts_replaced", sa.JSON, nullable=False),
        sa.Column("labor_cost", sa.Numeric(12, 2), nullable=False),
        sa.Column("parts_cost", sa.Numeric(12, 2), nullable=False),
        sa.Column("cost", sa.Numeric(12, 2), nullable=False),
        sa.Column("odometer_reading", sa.Integer),
        sa.Column("service_date", sa.Date, nullable=False),
        sa.Column("next_service_date", sa.Date),
        sa.Column("next_service_mileage", sa.Integer),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("priority", sa.String(20), nullable=False),
        sa.Column("warranty_info", sa.Text),
        sa.Column("notes", sa.Text),
        *_timestamps(),
    )
    op.create_index("ix_maintenance_records_vehicle_id", "maintenance_records", ["vehicle_id"])
    op.create_index("ix_maintenance_records_created_at", "maintenance_records", ["created_at"])


def downgrade() -> None:
    op.drop_table("maintenance_records")
    op.drop_table("fuel_records")
    op.drop_table("work_tickets")
    op.drop_table("bulk_accounts")
    op.drop_table("drivers")
    op.drop_table("vehicles")
