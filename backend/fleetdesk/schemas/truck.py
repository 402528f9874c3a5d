"""
FleetDesk Backend — Truck Schemas
==================================

What:  Request/response models for truck endpoints. Trucks are also embedded
       in shipment and driver responses.
"""

import uuid
from datetime import datetime
from typing import Optional

from fleetdesk.models.common import AVAILABILITY_STATUSES
from fleetdesk.schemas.common import (
    CamelModel,
    OneOf,
    PositiveNumber,
    RequiredText,
)

AVAILABILITY_MESSAGE = "Availability status must be either Available or Not Available."


class TruckCreate(CamelModel):
    truck_number: RequiredText("Truck number is required.", max_length=32)
    model: RequiredText("Model must be a non-empty string.", max_length=128, optional=True) = None
    capacity: PositiveNumber("Capacity must be a positive number.", optional=True) = None
    availability_status: OneOf(
        AVAILABILITY_STATUSES, AVAILABILITY_MESSAGE, optional=True
    ) = None


class TruckResponse(CamelModel):
    id: uuid.UUID
    truck_id: int
    truck_number: str
    model: Optional[str] = None
    capacity: Optional[float] = None
    availability_status: str
    created_at: datetime
    updated_at: datetime


class TruckCreatedResponse(CamelModel):
    message: str = "Truck created successfully."
    truck: TruckResponse


