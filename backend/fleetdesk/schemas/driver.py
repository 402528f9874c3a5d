"""
FleetDesk Backend — Driver Schemas
===================================

What:  Request/response models for driver endpoints.

Listing responses embed the assigned truck record (`truck`) next to the
numeric `assignedTruck` reference; `truck` is null when the driver has no
truck or the truck no longer exists.
"""

import uuid
from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator

from fleetdesk.models.common import AVAILABILITY_STATUSES
from fleetdesk.schemas.common import (
    CamelModel,
    IntegerId,
    OneOf,
    PositiveNumber,
    RequiredText,
    reject,
)
from fleetdesk.schemas.truck import AVAILABILITY_MESSAGE, TruckResponse

PHONE_MESSAGE = "Phone number is required."
PHONE_MAX_LENGTH = 32


def _digits_only(value: Any) -> str:
    # Numbers arrive either as JSON numbers or digit strings
    if isinstance(value, bool):
        reject("phone", PHONE_MESSAGE)
    if isinstance(value, int):
        value = str(value)
    if not isinstance(value, str) or not value.strip().isdigit():
        reject("phone", PHONE_MESSAGE)
    if len(value.strip()) > PHONE_MAX_LENGTH:
        reject("phone", f"Must be at most {PHONE_MAX_LENGTH} digits.")
    return value.strip()


class DriverCreate(CamelModel):
    name: RequiredText("Driver name is required.", max_length=255)
    license_number: RequiredText("License number is required.", max_length=64)
    phone_number: Annotated[str, BeforeValidator(_digits_only)]
    address: RequiredText("Address is required.")
    salary: PositiveNumber("Salary must be a positive number.")
    experience: RequiredText("Experience must be a string.", max_length=255, optional=True) = None
    availability_status: OneOf(
        AVAILABILITY_STATUSES, AVAILABILITY_MESSAGE, optional=True
    ) = None
    assigned_truck: IntegerId("Assigned truck must be an integer.", optional=True) = None


class DriverResponse(CamelModel):
    id: uuid.UUID
    driver_id: int
    name: str
    license_number: str
    phone_number: str
    address: str
    salary: float
    experience: Optional[str] = None
    availability_status: str
    assigned_truck: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class DriverWithTruck(DriverResponse):
    truck: Optional[TruckResponse] = None


class DriverCreatedResponse(CamelModel):
    message: str = "Driver created successfully."
    driver: DriverResponse
