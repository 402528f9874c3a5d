"""
FleetDesk Backend — Truck Route Handlers
=========================================

Endpoints:
    POST /api/trucks             register a truck (201)
    GET  /api/trucks             every truck
    GET  /api/trucks/available   trucks that can take a shipment
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.database import get_db_session
from fleetdesk.schemas.common import BusinessErrorResponse
from fleetdesk.schemas.truck import TruckCreate, TruckCreatedResponse, TruckResponse
from fleetdesk.services.truck_service import truck_service

router = APIRouter(prefix="/api/trucks", tags=["Trucks"])


@router.post(
    "",
    status_code=201,
    response_model=TruckCreatedResponse,
    responses={
        400: {"description": "Invalid fields or truck number already registered", "model": BusinessErrorResponse},
    },
    summary="Register a truck",
)
async def create_truck(
    payload: TruckCreate,
    db: AsyncSession = Depends(get_db_session),
) -> TruckCreatedResponse:
    return await truck_service.create_truck(db=db, payload=payload)


@router.get("", response_model=List[TruckResponse], summary="List trucks")
async def list_trucks(db: AsyncSession = Depends(get_db_session)) -> List[TruckResponse]:
    return await truck_service.list_trucks(db=db)


@router.get(
    "/available",
    response_model=List[TruckResponse],
    summary="List trucks whose status is Available",
)
async def list_available_trucks(
    db: AsyncSession = Depends(get_db_session),
) -> List[TruckResponse]:
    return await truck_service.list_trucks(db=db, available_only=True)
