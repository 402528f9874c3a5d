"""Create logistics tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates counters, clients, drivers, trucks, shipments and bills.
How:   Generic column types (Uuid, DateTime with time zone) so the same
       migration runs on PostgreSQL and SQLite.

References between tables are stored by value (numeric ids, bill UUIDs)
without foreign keys: deleting a shipment or client never cascades.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _record_columns():
    """Opaque UUID key and timestamps carried by every entity table."""
    return [
        sa.Column("id", sa.Uuid(), nullable=False, comment="Opaque storage identifier"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def _availability_column():
    return sa.Column(
        "availability_status",
        sa.String(20),
        server_default=sa.text("'Available'"),
        nullable=False,
    )


def upgrade() -> None:
    # One row per entity type; `sequence` is the last number handed out
    op.create_table(
        "counters",
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("sequence", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("name"),
    )

    op.create_table(
        "clients",
        *_record_columns(),
        sa.Column("client_id", sa.Integer(), nullable=False),
        sa.Column("client_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone_number", sa.String(32), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_clients_client_id", "clients", ["client_id"], unique=True)

    op.create_table(
        "drivers",
        *_record_columns(),
        sa.Column("driver_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("license_number", sa.String(64), nullable=False),
        sa.Column("phone_number", sa.String(32), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("salary", sa.Float(), nullable=False),
        sa.Column("experience", sa.String(255), nullable=True),
        _availability_column(),
        sa.Column("assigned_truck", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("license_number"),
    )
    op.create_index("ix_drivers_driver_id", "drivers", ["driver_id"], unique=True)
    op.create_index("ix_drivers_availability_status", "drivers", ["availability_status"])

    op.create_table(
        "trucks",
        *_record_columns(),
        sa.Column("truck_id", sa.Integer(), nullable=False),
        sa.Column("truck_number", sa.String(32), nullable=False),
        sa.Column("model", sa.String(128), nullable=True),
        sa.Column("capacity", sa.Float(), nullable=True),
        _availability_column(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("truck_number"),
    )
    op.create_index("ix_trucks_truck_id", "trucks", ["truck_id"], unique=True)
    op.create_index("ix_trucks_availability_status", "trucks", ["availability_status"])

    op.create_table(
        "shipments",
        *_record_columns(),
        sa.Column("shipment_id", sa.Integer(), nullable=False),
        sa.Column("shipment_name", sa.String(255), nullable=False),
        sa.Column("client_id", sa.Integer(), nullable=False),
        sa.Column("truck_id", sa.Integer(), nullable=True),
        sa.Column("driver_id", sa.Integer(), nullable=True),
        sa.Column("pickup_location", sa.String(255), nullable=False),
        sa.Column("delivery_location", sa.String(255), nullable=False),
        sa.Column("cargo_type", sa.String(128), nullable=False),
        sa.Column("cargo_weight", sa.Float(), nullable=False),
        sa.Column("special_instructions", sa.Text(), nullable=True),
        sa.Column("departure_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("arrival_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "status",
            sa.String(20),
            server_default=sa.text("'pending'"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_shipments_shipment_id", "shipments", ["shipment_id"], unique=True)
    op.create_index("ix_shipments_client_id", "shipments", ["client_id"])

    op.create_table(
        "bills",
        *_record_columns(),
        sa.Column("bill_id", sa.Integer(), nullable=False),
        sa.Column("client_id", sa.Uuid(), nullable=False),
        sa.Column("shipment_id", sa.Uuid(), nullable=False),
        sa.Column("issue_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("tax_amount", sa.Float(), nullable=False),
        sa.Column("total_amount", sa.Float(), nullable=False),
        sa.Column(
            "payment_status",
            sa.String(20),
            server_default=sa.text("'pending'"),
            nullable=False,
        ),
        sa.Column("payment_method", sa.String(20), nullable=True),
        sa.Column("payment_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("gstin", sa.String(20), nullable=True),
        sa.Column("special_instructions", sa.Text(), nullable=True),
        sa.Column("fuel_cost", sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_bills_bill_id", "bills", ["bill_id"], unique=True)
    op.create_index("ix_bills_client_id", "bills", ["client_id"])
    op.create_index("ix_bills_shipment_id", "bills", ["shipment_id"])


def downgrade() -> None:
    """Drop every table (indexes go with them). Destructive: all data is lost."""
    for table in ("bills", "shipments", "trucks", "drivers", "clients", "counters"):
        op.drop_table(table)
