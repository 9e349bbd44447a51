"""components and vehicle transfers

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18 12:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "components",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("vehicle_id", sa.String(64), sa.ForeignKey("vehicles.id"), nullable=False),
        sa.Column("component_type", sa.String(20), nullable=False),
        sa.Column("make", sa.String(100), nullable=False),
        sa.Column("model", sa.String(100)),
        sa.Column("serial_number", sa.String(100), nullable=False),
        sa.Column("position", sa.String(20)),
        sa.Column("installation_date", sa.Date, nullable=False),
        sa.Column("installation_mileage", sa.Integer, nullable=False),
        sa.Column("removal_date", sa.Date),
        sa.Column("removal_mileage", sa.Integer),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("warranty_months", sa.Integer),
        sa.Column("purchase_cost", sa.Numeric(12, 2), nullable=False),
        sa.Column("supplier", sa.String(150)),
        sa.Column("notes", sa.Text),
        *_timestamps(),
    )
    op.create_index("ix_components_vehicle_id", "components", ["vehicle_id"])
    op.create_index("ix_components_component_type", "components", ["component_type"])
    op.create_index("ix_components_serial_number", "components", ["serial_number"])
    op.create_index("ix_components_created_at", "components", ["created_at"])

    op.create_table(
        "transfers",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("vehicle_id", sa.String(64), sa.ForeignKey("vehicles.id"), nullable=False),
        sa.Column("from_department", sa.String(150)),
        sa.Column("to_department", sa.String(150), nullable=False),
        sa.Column("from_location", sa.String(150)),
        sa.Column("to_location", sa.String(150), nullable=False),
        sa.Column("transfer_date", sa.Date, nullable=False),
        sa.Column("mileage", sa.Integer, nullable=False),
        sa.Column("authorized_by", sa.String(150), nullable=False),
        sa.Column("received_by", sa.String(150)),
        sa.Column("reason", sa.Text),
        sa.Column("notes", sa.Text),
        *_timestamps(),
    )
    op.create_index("ix_transfers_vehicle_id", "transfers", ["vehicle_id"])
    op.create_index("ix_transfers_created_at", "transfers", ["created_at"])


def downgrade() -> None:
    op.drop_table("transfers")
    op.drop_table("components")
