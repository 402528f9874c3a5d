"""
FleetDesk Backend — Shipment Model
===================================

What:  A cargo movement for a client, optionally carried by a truck and a
       driver.

References are stored by numeric id (client_id, truck_id, driver_id) with
no foreign keys: deleting a client, truck or driver leaves its shipments in
place, and shipment reads resolve missing references to null.

Status lifecycle: 'pending' (default) → 'delivered' | 'cancelled'.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from fleetdesk.database import Base
from fleetdesk.models.common import SHIPMENT_PENDING, RecordMixin


class Shipment(RecordMixin, Base):
    __tablename__ = "shipments"

    shipment_id: Mapped[int] = mapped_column(Integer, unique=True, index=True, nullable=False)
    shipment_name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    truck_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    driver_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    pickup_location: Mapped[str] = mapped_column(String(255), nullable=False)
    delivery_location: Mapped[str] = mapped_column(String(255), nullable=False)
    cargo_type: Mapped[str] = mapped_column(String(128), nullable=False)
    cargo_weight: Mapped[float] = mapped_column(Float, nullable=False)
    special_instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    departure_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    arrival_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=SHIPMENT_PENDING,
        server_default=text(f"'{SHIPMENT_PENDING}'"),
    )

    def __repr__(self) -> str:
        return f"<Shipment(shipment_id={self.shipment_id}, status='{self.status}')>"
