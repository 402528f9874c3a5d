"""
FleetDesk Backend — Bill Route Handlers
========================================

Endpoints:
    POST /api/bills   issue a bill for a client's shipment (201)
    GET  /api/bills   every bill
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.database import get_db_session
from fleetdesk.schemas.bill import BillCreate, BillCreatedResponse, BillResponse
from fleetdesk.schemas.common import BusinessErrorResponse
from fleetdesk.services.bill_service import bill_service

router = APIRouter(prefix="/api/bills", tags=["Bills"])


@router.post(
    "",
    status_code=201,
    response_model=BillCreatedResponse,
    responses={
        400: {"description": "Invalid fields or unknown client/shipment", "model": BusinessErrorResponse},
    },
    summary="Issue a bill",
)
async def create_bill(
    payload: BillCreate,
    db: AsyncSession = Depends(get_db_session),
) -> BillCreatedResponse:
    return await bill_service.create_bill(db=db, payload=payload)


@router.get("", response_model=List[BillResponse], summary="List bills")
async def list_bills(db: AsyncSession = Depends(get_db_session)) -> List[BillResponse]:
    return await bill_service.list_bills(db=db)
