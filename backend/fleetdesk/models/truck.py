"""
FleetDesk Backend — Truck Model
================================

What:  A truck that can carry shipments. Availability follows the same
       rules as Driver.availability_status.
"""

from typing import Optional

from sqlalchemy import Float, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from fleetdesk.database import Base
from fleetdesk.models.common import AVAILABLE, RecordMixin


class Truck(RecordMixin, Base):
    __tablename__ = "trucks"

    truck_id: Mapped[int] = mapped_column(Integer, unique=True, index=True, nullable=False)
    truck_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    model: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    capacity: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    availability_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AVAILABLE,
        server_default=text(f"'{AVAILABLE}'"),
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Truck(truck_id={self.truck_id}, status='{self.availability_status}')>"
