"""
FleetDesk Backend — Client Schemas
===================================
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import EmailStr

from fleetdesk.schemas.common import CamelModel, RequiredText


class ClientCreate(CamelModel):
    client_name: RequiredText("Client name is required.", max_length=255)
    email: Optional[EmailStr] = None
    phone_number: RequiredText(
        "Phone number must be a non-empty string.", max_length=32, optional=True
    ) = None
    address: RequiredText("Address must be a non-empty string.", optional=True) = None


class ClientResponse(CamelModel):
    id: uuid.UUID
    client_id: int
    client_name: str
    email: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime


class ClientCreatedResponse(CamelModel):
    message: str = "Client created successfully."
    client: ClientResponse
