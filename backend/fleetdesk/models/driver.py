"""
FleetDesk Backend — Driver Model
=================================

What:  A driver who can be assigned to shipments.

Availability:
    availability_status starts as 'Available'. The shipment workflow flips
    it to 'Not Available' and records assigned_truck (truck numeric id) when
    the driver is attached to a shipment. Nothing in the workflow flips it
    back.
"""

from typing import Optional

from sqlalchemy import Float, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from fleetdesk.database import Base
from fleetdesk.models.common import AVAILABLE, RecordMixin


class Driver(RecordMixin, Base):
    __tablename__ = "drivers"

    driver_id: Mapped[int] = mapped_column(Integer, unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    license_number: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    salary: Mapped[float] = mapped_column(Float, nullable=False)
    experience: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    availability_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AVAILABLE,
        server_default=text(f"'{AVAILABLE}'"),
        index=True,
    )

    # Truck numeric id, not the truck's UUID
    assigned_truck: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<Driver(driver_id={self.driver_id}, "
            f"status='{self.availability_status}')>"
        )
