"""
FleetDesk Backend — Bill Model
===============================

What:  An invoice issued to a client for a shipment.

Unlike shipments, bills reference the client and the shipment by their
opaque UUIDs. bill_id is the human-facing number printed on invoices.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from fleetdesk.database import Base
from fleetdesk.models.common import RecordMixin, utcnow


class Bill(RecordMixin, Base):
    __tablename__ = "bills"

    bill_id: Mapped[int] = mapped_column(Integer, unique=True, index=True, nullable=False)
    client_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True, nullable=False)
    shipment_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True, nullable=False)

    issue_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    amount: Mapped[float] = mapped_column(Float, nullable=False)
    tax_amount: Mapped[float] = mapped_column(Float, nullable=False)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False)

    payment_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="pending",
        server_default=text("'pending'"),
    )
    payment_method: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    payment_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    gstin: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    special_instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    fuel_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    def __repr__(self) -> str:
        return f"<Bill(bill_id={self.bill_id}, status='{self.payment_status}')>"
