"""
FleetDesk Backend — Bill Schemas
=================================

What:  Request/response models for bill endpoints.

clientId and shipmentId on a bill are the opaque UUIDs of the referenced
records (the `id` field of ClientResponse / ShipmentResponse), not their
numeric ids.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from fleetdesk.models.common import PAYMENT_METHODS, PAYMENT_STATUSES
from fleetdesk.schemas.common import (
    CamelModel,
    DateTimeField,
    OneOf,
    PositiveNumber,
    RequiredText,
)


class BillCreate(CamelModel):
    client_id: uuid.UUID
    shipment_id: uuid.UUID
    issue_date: DateTimeField("Issue date must be a valid date.", optional=True) = None
    due_date: DateTimeField("Due date must be a valid date.")
    amount: PositiveNumber("Amount must be a non-negative number.", allow_zero=True)
    tax_amount: PositiveNumber("Tax amount must be a non-negative number.", allow_zero=True)
    total_amount: PositiveNumber("Total amount must be a non-negative number.", allow_zero=True)
    payment_status: OneOf(
        PAYMENT_STATUSES,
        "Payment status must be 'pending', 'paid', or 'overdue'.",
        optional=True,
    ) = None
    payment_method: OneOf(
        PAYMENT_METHODS,
        "Payment method must be 'card', 'bank transfer', or 'cash'.",
        optional=True,
    ) = None
    payment_date: DateTimeField("Payment date must be a valid date.", optional=True) = None
    gstin: RequiredText("GSTIN must be a non-empty string.", max_length=20, optional=True) = Field(
        default=None, alias="GSTIN"
    )
    special_instructions: Optional[str] = None
    fuel_cost: PositiveNumber(
        "Fuel cost must be a non-negative number.", optional=True, allow_zero=True
    ) = None


class BillResponse(CamelModel):
    id: uuid.UUID
    bill_id: int
    client_id: uuid.UUID
    shipment_id: uuid.UUID
    issue_date: datetime
    due_date: datetime
    amount: float
    tax_amount: float
    total_amount: float
    payment_status: str
    payment_method: Optional[str] = None
    payment_date: Optional[datetime] = None
    gstin: Optional[str] = Field(default=None, alias="GSTIN")
    special_instructions: Optional[str] = None
    fuel_cost: Optional[float] = None
    created_at: datetime
    updated_at: datetime


class BillCreatedResponse(CamelModel):
    message: str = "Bill created successfully."
    bill: BillResponse
