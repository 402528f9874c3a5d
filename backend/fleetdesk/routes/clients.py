"""
FleetDesk Backend — Client Route Handlers
==========================================

Endpoints:
    POST /api/clients   register a client (201)
    GET  /api/clients   every client
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.database import get_db_session
from fleetdesk.schemas.client import ClientCreate, ClientCreatedResponse, ClientResponse
from fleetdesk.schemas.common import ValidationErrorResponse
from fleetdesk.services.client_service import client_service

router = APIRouter(prefix="/api/clients", tags=["Clients"])


@router.post(
    "",
    status_code=201,
    response_model=ClientCreatedResponse,
    responses={400: {"description": "Invalid fields", "model": ValidationErrorResponse}},
    summary="Register a client",
)
async def create_client(
    payload: ClientCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ClientCreatedResponse:
    return await client_service.create_client(db=db, payload=payload)


@router.get("", response_model=List[ClientResponse], summary="List clients")
async def list_clients(db: AsyncSession = Depends(get_db_session)) -> List[ClientResponse]:
    return await client_service.list_clients(db=db)
