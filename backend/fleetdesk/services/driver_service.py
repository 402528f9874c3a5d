"""
FleetDesk Backend — Driver Service
===================================

What:  Registers drivers and lists them with their assigned truck resolved.
How:   License numbers are unique: a second registration with the same
       licenseNumber is refused with the business error "License Exists".

Listing:
    GET /api/drivers            every driver
    GET /api/drivers/available  drivers whose status is 'Available'
    Each entry carries `truck`, the record behind assignedTruck (or null).
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.exceptions import BusinessRuleError, DatabaseError, FleetDeskError
from fleetdesk.models.common import AVAILABLE
from fleetdesk.models.driver import Driver
from fleetdesk.models.truck import Truck
from fleetdesk.schemas.driver import (
    DriverCreate,
    DriverCreatedResponse,
    DriverResponse,
    DriverWithTruck,
)
from fleetdesk.schemas.truck import TruckResponse
from fleetdesk.services.sequence_service import DRIVER_KEY, next_sequence

logger = logging.getLogger(__name__)


class DriverService:

    async def create_driver(
        self, db: AsyncSession, payload: DriverCreate
    ) -> DriverCreatedResponse:
        """
        Register a driver. The driverId is allocated before the record is built.

        Raises:
            BusinessRuleError: licenseNumber already registered
            DatabaseError: storage failure
        """
        try:
            existing = await db.execute(
                select(Driver.id).where(Driver.license_number == payload.license_number)
            )
            if existing.first() is not None:
                raise BusinessRuleError(
                    "License Exists", {"license_number": payload.license_number}
                )

            driver_id = await next_sequence(db, DRIVER_KEY)
            driver = Driver(
                driver_id=driver_id,
                name=payload.name,
                license_number=payload.license_number,
                phone_number=payload.phone_number,
                address=payload.address,
                salary=payload.salary,
                experience=payload.experience,
                availability_status=payload.availability_status or AVAILABLE,
                assigned_truck=payload.assigned_truck,
            )
            db.add(driver)
            await db.flush()

        except FleetDeskError:
            raise
        except Exception as e:
            logger.error("Error creating driver: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the driver. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Driver %d created", driver.driver_id)
        return DriverCreatedResponse(driver=DriverResponse.model_validate(driver))

    async def list_drivers(
        self, db: AsyncSession, available_only: bool = False
    ) -> List[DriverWithTruck]:
        query = select(Driver).order_by(Driver.driver_id)
        if available_only:
            query = query.where(Driver.availability_status == AVAILABLE)

        try:
            drivers = list((await db.execute(query)).scalars().all())
            truck_ids = {d.assigned_truck for d in drivers if d.assigned_truck is not None}
            trucks = {}
            if truck_ids:
                result = await db.execute(select(Truck).where(Truck.truck_id.in_(truck_ids)))
                trucks = {t.truck_id: t for t in result.scalars().all()}
        except Exception as e:
            logger.error("Database error listing drivers: %s", str(e), exc_info=True)
            raise DatabaseError(message="Could not retrieve drivers. Please try again.")

        items = []
        for driver in drivers:
            truck = trucks.get(driver.assigned_truck)
            data = DriverResponse.model_validate(driver).model_dump()
            data["truck"] = TruckResponse.model_validate(truck) if truck else None
            items.append(DriverWithTruck.model_validate(data))
        return items


driver_service = DriverService()
