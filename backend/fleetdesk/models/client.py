"""
FleetDesk Backend — Client Model
=================================

What:  A customer that ships cargo and receives bills.
Who:   Referenced by Shipment.client_id (numeric id) and Bill.client_id
       (opaque UUID).
"""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fleetdesk.database import Base
from fleetdesk.models.common import RecordMixin


class Client(RecordMixin, Base):
    __tablename__ = "clients"

    client_id: Mapped[int] = mapped_column(Integer, unique=True, index=True, nullable=False)
    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Client(client_id={self.client_id}, name='{self.client_name}')>"
