"""
FleetDesk Backend — Shipment Route Handlers
============================================

What:  HTTP entry points for shipment creation, listing, lookup, update
       and deletion.
How:   Thin handlers: FastAPI validates the body against the schema, the
       handler delegates to ShipmentService, and global exception handlers
       format every error.

Endpoints:
    POST   /api/shipments                  create (201)
    GET    /api/shipments                  list with truck, driver, clientName
    GET    /api/shipments/{shipmentId}     one shipment with truck, driver
    PUT    /api/shipments/{shipmentId}     allow-listed update
    DELETE /api/shipments/{shipmentId}     delete (no cascade)
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.database import get_db_session
from fleetdesk.schemas.common import (
    BusinessErrorResponse,
    MAX_ID,
    ErrorResponse,
    ValidationErrorResponse,
)
from fleetdesk.schemas.shipment import (
    ShipmentCreate,
    ShipmentCreatedResponse,
    ShipmentDeletedResponse,
    ShipmentDetail,
    ShipmentListItem,
    ShipmentUpdate,
    ShipmentUpdatedResponse,
)
from fleetdesk.services.shipment_service import shipment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/shipments", tags=["Shipments"])

ShipmentId = Annotated[
    int, Path(alias="shipmentId", ge=1, le=MAX_ID, description="Numeric shipment id")
]


@router.post(
    "",
    status_code=201,
    response_model=ShipmentCreatedResponse,
    responses={
        400: {"description": "Field validation or business rule failure", "model": BusinessErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a shipment and assign its truck and driver",
)
async def create_shipment(
    payload: ShipmentCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ShipmentCreatedResponse:
    """
    Create a shipment.

    The referenced truck and driver (both optional) must exist and be
    Available; the client must exist. On success both become Not Available
    and the driver's assignedTruck is set to the shipment's truckId.
    """
    return await shipment_service.create_shipment(db=db, payload=payload)


@router.get(
    "",
    response_model=List[ShipmentListItem],
    summary="List shipments with their truck, driver and client name",
)
async def list_shipments(
    db: AsyncSession = Depends(get_db_session),
) -> List[ShipmentListItem]:
    return await shipment_service.list_shipments(db=db)


@router.get(
    "/{shipmentId}",
    response_model=ShipmentDetail,
    responses={404: {"description": "Shipment not found", "model": ErrorResponse}},
    summary="Get a shipment by its numeric id",
)
async def get_shipment(
    shipment_id: ShipmentId,
    db: AsyncSession = Depends(get_db_session),
) -> ShipmentDetail:
    return await shipment_service.get_shipment(db=db, shipment_id=shipment_id)


@router.put(
    "/{shipmentId}",
    response_model=ShipmentUpdatedResponse,
    responses={
        400: {"description": "Field validation failure", "model": ValidationErrorResponse},
        404: {"description": "Shipment not found", "model": ErrorResponse},
    },
    summary="Update a shipment's mutable fields",
)
async def update_shipment(
    payload: ShipmentUpdate,
    shipment_id: ShipmentId,
    db: AsyncSession = Depends(get_db_session),
) -> ShipmentUpdatedResponse:
    """
    Only shipmentName, pickupLocation, deliveryLocation, cargoType,
    cargoWeight, specialInstructions, departureDate, arrivalDate and status
    can change. Other keys in the body are ignored.
    """
    return await shipment_service.update_shipment(
        db=db, shipment_id=shipment_id, payload=payload
    )


@router.delete(
    "/{shipmentId}",
    response_model=ShipmentDeletedResponse,
    responses={404: {"description": "Shipment not found", "model": ErrorResponse}},
    summary="Delete a shipment",
)
async def delete_shipment(
    shipment_id: ShipmentId,
    db: AsyncSession = Depends(get_db_session),
) -> ShipmentDeletedResponse:
    return await shipment_service.delete_shipment(db=db, shipment_id=shipment_id)
