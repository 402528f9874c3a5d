"""
FleetDesk Backend — Shared Column Definitions
==============================================

What:  Status vocabularies and column helpers shared by several models.
How:   Plain string constants (stored in VARCHAR columns) plus a mixin that
       adds the opaque UUID primary key and the created/updated timestamps.

Every entity carries two identifiers:
    - id:            opaque UUID primary key generated on insert
    - <entity>_id:   human-facing numeric id from the Sequence Generator
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

# ── Availability (Driver, Truck) ──────────────────────────────────────────
AVAILABLE = "Available"
NOT_AVAILABLE = "Not Available"
AVAILABILITY_STATUSES = (AVAILABLE, NOT_AVAILABLE)

# ── Shipment status ───────────────────────────────────────────────────────
SHIPMENT_PENDING = "pending"
SHIPMENT_STATUSES = ("pending", "delivered", "cancelled")

# ── Bill payment ──────────────────────────────────────────────────────────
PAYMENT_STATUSES = ("pending", "paid", "overdue")
PAYMENT_METHODS = ("card", "bank transfer", "cash")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordMixin:
    """Opaque primary key plus created_at/updated_at timestamps."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Opaque storage identifier",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
