"""
FleetDesk Backend — Driver Route Handlers
==========================================

Endpoints:
    POST /api/drivers             register a driver (201)
    GET  /api/drivers             every driver with its assigned truck
    GET  /api/drivers/available   drivers that can take a shipment
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.database import get_db_session
from fleetdesk.schemas.common import BusinessErrorResponse
from fleetdesk.schemas.driver import DriverCreate, DriverCreatedResponse, DriverWithTruck
from fleetdesk.services.driver_service import driver_service

router = APIRouter(prefix="/api/drivers", tags=["Drivers"])


@router.post(
    "",
    status_code=201,
    response_model=DriverCreatedResponse,
    responses={
        400: {"description": "Invalid fields or license already registered", "model": BusinessErrorResponse},
    },
    summary="Register a driver",
)
async def create_driver(
    payload: DriverCreate,
    db: AsyncSession = Depends(get_db_session),
) -> DriverCreatedResponse:
    return await driver_service.create_driver(db=db, payload=payload)


@router.get("", response_model=List[DriverWithTruck], summary="List drivers")
async def list_drivers(db: AsyncSession = Depends(get_db_session)) -> List[DriverWithTruck]:
    return await driver_service.list_drivers(db=db)


@router.get(
    "/available",
    response_model=List[DriverWithTruck],
    summary="List drivers whose status is Available",
)
async def list_available_drivers(
    db: AsyncSession = Depends(get_db_session),
) -> List[DriverWithTruck]:
    return await driver_service.list_drivers(db=db, available_only=True)
