"""
FleetDesk Backend — Counter Model
==================================

What:  One row per entity type holding the last numeric id handed out.
How:   Advanced only by services.sequence_service.next_sequence, which issues
       a single atomic upsert. Rows are never decremented or deleted.

Rows (created lazily on first use):
    name='clientId'   sequence=<last client id>
    name='driverId'   ...
    name='truckId'
    name='shipmentId'
    name='billId'
"""

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from fleetdesk.database import Base


class Counter(Base):
    __tablename__ = "counters"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    sequence: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Counter(name='{self.name}', sequence={self.sequence})>"
