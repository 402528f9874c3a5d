"""
FleetDesk Backend — Truck Service
==================================

What:  Registers trucks and lists them (all, or only the available ones).
       Availability is changed by the shipment workflow, not here.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.exceptions import BusinessRuleError, DatabaseError, FleetDeskError
from fleetdesk.models.common import AVAILABLE
from fleetdesk.models.truck import Truck
from fleetdesk.schemas.truck import TruckCreate, TruckCreatedResponse, TruckResponse
from fleetdesk.services.sequence_service import TRUCK_KEY, next_sequence

logger = logging.getLogger(__name__)


class TruckService:

    async def create_truck(self, db: AsyncSession, payload: TruckCreate) -> TruckCreatedResponse:
        """
        Raises:
            BusinessRuleError: truckNumber is already registered
        """
        try:
            existing = await db.execute(
                select(Truck.id).where(Truck.truck_number == payload.truck_number)
            )
            if existing.first() is not None:
                raise BusinessRuleError(
                    "Truck Number Exists", {"truck_number": payload.truck_number}
                )

            truck_id = await next_sequence(db, TRUCK_KEY)
            truck = Truck(
                truck_id=truck_id,
                truck_number=payload.truck_number,
                model=payload.model,
                capacity=payload.capacity,
                availability_status=payload.availability_status or AVAILABLE,
            )
            db.add(truck)
            await db.flush()

        except FleetDeskError:
            raise
        except Exception as e:
            logger.error("Error creating truck: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the truck. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Truck %d created (%s)", truck.truck_id, truck.truck_number)
        return TruckCreatedResponse(truck=TruckResponse.model_validate(truck))

    async def list_trucks(self, db: AsyncSession, available_only: bool = False) -> List[TruckResponse]:
        query = select(Truck).order_by(Truck.truck_id)
        if available_only:
            query = query.where(Truck.availability_status == AVAILABLE)
        try:
            result = await db.execute(query)
        except Exception as e:
            logger.error("Database error listing trucks: %s", str(e), exc_info=True)
            raise DatabaseError(message="Could not retrieve trucks. Please try again.")
        return [TruckResponse.model_validate(t) for t in result.scalars().all()]


truck_service = TruckService()
