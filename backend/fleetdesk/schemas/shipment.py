"""
FleetDesk Backend — Shipment Schemas
=====================================

What:  Pydantic models defining the shipment API contract.
How:   ShipmentCreate/ShipmentUpdate validate request bodies field by field;
       every violation is reported together. Response models mirror the ORM
       record and add the resolved truck, driver and client name.

Update allow-list:
    ShipmentUpdate only declares the fields a caller may change. Keys such
    as clientId, truckId, driverId or shipmentId are ignored, so an update
    can never move a shipment to another client or bypass the availability
    checks that guard truck/driver assignment.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field

from fleetdesk.models.common import SHIPMENT_STATUSES
from fleetdesk.schemas.common import (
    CamelModel,
    DateTimeField,
    IntegerId,
    OneOf,
    PositiveNumber,
    RequiredText,
)
from fleetdesk.schemas.driver import DriverResponse
from fleetdesk.schemas.truck import TruckResponse

CARGO_WEIGHT_MESSAGE = "Cargo weight must be a positive number."
STATUS_MESSAGE = "Status must be 'pending', 'delivered', or 'cancelled'."


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ShipmentCreate(CamelModel):
    """Body of POST /api/shipments."""

    client_id: IntegerId("Client ID must be an integer.")
    shipment_name: RequiredText("Shipment Name is required.", max_length=255)
    pickup_location: RequiredText("Pickup location is required.", max_length=255)
    delivery_location: RequiredText("Delivery location is required.", max_length=255)
    cargo_type: RequiredText("Cargo type is required.", max_length=128)
    cargo_weight: PositiveNumber(CARGO_WEIGHT_MESSAGE)
    departure_date: DateTimeField("Departure date must be a valid date.")
    arrival_date: DateTimeField("Arrival date must be a valid date.")

    truck_id: IntegerId("Truck ID must be an integer.", optional=True) = None
    driver_id: IntegerId("Driver ID must be an integer.", optional=True) = None
    special_instructions: Optional[str] = None
    status: OneOf(SHIPMENT_STATUSES, STATUS_MESSAGE, optional=True) = None


class ShipmentUpdate(CamelModel):
    """Body of PUT /api/shipments/{shipmentId}. Every field is optional."""

    model_config = ConfigDict(extra="ignore")

    shipment_name: RequiredText(
        "Shipment Name must be a non-empty string.", max_length=255, optional=True
    ) = None
    pickup_location: RequiredText(
        "Pickup location must be a non-empty string.", max_length=255, optional=True
    ) = None
    delivery_location: RequiredText(
        "Delivery location must be a non-empty string.", max_length=255, optional=True
    ) = None
    cargo_type: RequiredText(
        "Cargo type must be a non-empty string.", max_length=128, optional=True
    ) = None
    cargo_weight: PositiveNumber(CARGO_WEIGHT_MESSAGE, optional=True) = None
    departure_date: DateTimeField("Departure date must be a valid date.", optional=True) = None
    arrival_date: DateTimeField("Arrival date must be a valid date.", optional=True) = None
    special_instructions: Optional[str] = None
    status: OneOf(SHIPMENT_STATUSES, STATUS_MESSAGE, optional=True) = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ShipmentResponse(CamelModel):
    """The stored shipment record."""

    id: uuid.UUID = Field(description="Opaque storage identifier")
    shipment_id: int = Field(description="Human-facing shipment number")
    shipment_name: str
    client_id: int
    truck_id: Optional[int] = None
    driver_id: Optional[int] = None
    pickup_location: str
    delivery_location: str
    cargo_type: str
    cargo_weight: float
    special_instructions: Optional[str] = None
    departure_date: datetime
    arrival_date: datetime
    status: str
    created_at: datetime
    updated_at: datetime


class ShipmentDetail(ShipmentResponse):
    """Shipment plus its resolved truck and driver (null when absent)."""

    truck: Optional[TruckResponse] = None
    driver: Optional[DriverResponse] = None


class ShipmentListItem(ShipmentDetail):
    """Listing entry; clientName is null when the client no longer exists."""

    client_name: Optional[str] = None


class ShipmentCreatedResponse(CamelModel):
    message: str = "Shipment created successfully."
    shipment: ShipmentResponse


class ShipmentUpdatedResponse(ShipmentDetail):
    message: str = "Shipment updated successfully."


class ShipmentDeletedResponse(CamelModel):
    message: str = "Shipment deleted successfully."
    shipment: ShipmentResponse
