"""
FleetDesk Backend — Shipment Service (Assignment Workflow)
===========================================================

What:  Creates shipments and assigns trucks and drivers to them; reads,
       updates and deletes shipments with their related records resolved.
How:   Stateless service operating on the request's AsyncSession. It only
       flushes; the session dependency commits or rolls back the whole
       request as one transaction.
Who:   Called by the /api/shipments route handlers.

Creation Flow (POST /api/shipments):
    ┌───────────┐   ┌──────────────────────────┐   ┌───────────────────────┐
    │  Schema   │──▶│  Business rules          │──▶│  Writes (one txn)     │
    │ (fields)  │   │  truck → driver → client │   │  id, insert, claims   │
    └───────────┘   └──────────────────────────┘   └───────────────────────┘

    1. Field validation happens before this service is called (ShipmentCreate).
    2. Business rules run in order and the first failure is raised:
         truck exists and is Available
         driver exists and is Available
         client exists
    3. shipmentId comes from the Sequence Generator, then the record is built
       and inserted.
    4. Truck and driver are claimed with conditional updates
       (... WHERE availability_status = 'Available'). A claim that matches
       no row means a concurrent request took the truck/driver after step 2;
       the request fails with the same "not available" error and the
       rollback removes the inserted shipment.
"""

import logging
from typing import Dict, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.exceptions import (
    BusinessRuleError,
    DatabaseError,
    FleetDeskError,
    NotFoundError,
)
from fleetdesk.models.client import Client
from fleetdesk.models.common import AVAILABLE, NOT_AVAILABLE, SHIPMENT_PENDING
from fleetdesk.models.driver import Driver
from fleetdesk.models.shipment import Shipment
from fleetdesk.models.truck import Truck
from fleetdesk.schemas.driver import DriverResponse
from fleetdesk.schemas.shipment import (
    ShipmentCreate,
    ShipmentCreatedResponse,
    ShipmentDeletedResponse,
    ShipmentDetail,
    ShipmentListItem,
    ShipmentResponse,
    ShipmentUpdate,
    ShipmentUpdatedResponse,
)
from fleetdesk.schemas.truck import TruckResponse
from fleetdesk.services.sequence_service import SHIPMENT_KEY, next_sequence

logger = logging.getLogger(__name__)

# Business rule messages (returned verbatim to the client)
INVALID_TRUCK = "Invalid Truck ID. Truck does not exist."
TRUCK_UNAVAILABLE = "Truck is not available."
INVALID_DRIVER = "Invalid Driver ID. Driver does not exist."
DRIVER_UNAVAILABLE = "Driver is not available."
INVALID_CLIENT = "Invalid Client ID. Client does not exist."

# Update fields that may be cleared with an explicit null
_CLEARABLE_FIELDS = {"special_instructions"}

ShipmentView = TypeVar("ShipmentView", bound=ShipmentResponse)


class ShipmentService:
    """
    Business logic layer for shipment operations.

    Responsibilities:
        - create_shipment(): validate references, insert, claim truck/driver
        - list_shipments(): every shipment with truck, driver and client name
        - get_shipment(): one shipment with truck and driver
        - update_shipment(): allow-listed field changes
        - delete_shipment(): remove one shipment, no cascade

    Error Handling Strategy:
        FleetDeskError subclasses propagate unchanged. Anything else is
        logged with its traceback and re-raised as DatabaseError so the
        client only ever sees a generic 500 message.
    """

    # ── Create ────────────────────────────────────────────────────────────

    async def create_shipment(
        self, db: AsyncSession, payload: ShipmentCreate
    ) -> ShipmentCreatedResponse:
        """
        Validate references, create the shipment and claim its truck/driver.

        Raises:
            BusinessRuleError: missing/unavailable truck or driver, missing client
            DatabaseError: any storage failure
        """
        try:
            if payload.truck_id is not None:
                truck = await self._find_truck(db, payload.truck_id)
                if truck is None:
                    raise BusinessRuleError(INVALID_TRUCK, {"truck_id": payload.truck_id})
                if truck.availability_status != AVAILABLE:
                    raise BusinessRuleError(TRUCK_UNAVAILABLE, {"truck_id": payload.truck_id})

            if payload.driver_id is not None:
                driver = await self._find_driver(db, payload.driver_id)
                if driver is None:
                    raise BusinessRuleError(INVALID_DRIVER, {"driver_id": payload.driver_id})
                if driver.availability_status != AVAILABLE:
                    raise BusinessRuleError(DRIVER_UNAVAILABLE, {"driver_id": payload.driver_id})

            client = await self._find_client(db, payload.client_id)
            if client is None:
                raise BusinessRuleError(INVALID_CLIENT, {"client_id": payload.client_id})

            # Id first, then the record: no placeholder id is ever stored
            shipment_id = await next_sequence(db, SHIPMENT_KEY)
            shipment = Shipment(
                shipment_id=shipment_id,
                shipment_name=payload.shipment_name,
                client_id=payload.client_id,
                truck_id=payload.truck_id,
                driver_id=payload.driver_id,
                pickup_location=payload.pickup_location,
                delivery_location=payload.delivery_location,
                cargo_type=payload.cargo_type,
                cargo_weight=payload.cargo_weight,
                special_instructions=payload.special_instructions,
                departure_date=payload.departure_date,
                arrival_date=payload.arrival_date,
                status=payload.status or SHIPMENT_PENDING,
            )
            db.add(shipment)
            await db.flush()

            if payload.truck_id is not None:
                claimed = await self._claim(db, Truck, Truck.truck_id, payload.truck_id)
                if not claimed:
                    raise BusinessRuleError(TRUCK_UNAVAILABLE, {"truck_id": payload.truck_id})

            if payload.driver_id is not None:
                # assigned_truck follows the shipment's truck, None included
                claimed = await self._claim(
                    db,
                    Driver,
                    Driver.driver_id,
                    payload.driver_id,
                    assigned_truck=payload.truck_id,
                )
                if not claimed:
                    raise BusinessRuleError(DRIVER_UNAVAILABLE, {"driver_id": payload.driver_id})

            logger.info(
                "Shipment %d created for client %d (truck=%s, driver=%s)",
                shipment.shipment_id,
                shipment.client_id,
                shipment.truck_id,
                shipment.driver_id,
            )
            return ShipmentCreatedResponse(
                shipment=ShipmentResponse.model_validate(shipment)
            )

        except FleetDeskError:
            raise
        except Exception as e:
            logger.error("Error creating shipment: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the shipment. Please try again.",
                context={"error_type": type(e).__name__},
            )

    # ── Read ──────────────────────────────────────────────────────────────

    async def list_shipments(self, db: AsyncSession) -> List[ShipmentListItem]:
        """
        Every shipment with its truck, driver and client name.

        Related records are fetched in one query per entity type. A shipment
        whose client was deleted is returned with clientName = null.
        """
        try:
            result = await db.execute(select(Shipment).order_by(Shipment.shipment_id))
            shipments = list(result.scalars().all())

            trucks = await self._trucks_by_id(db, (s.truck_id for s in shipments))
            drivers = await self._drivers_by_id(db, (s.driver_id for s in shipments))
            clients = await self._clients_by_id(db, (s.client_id for s in shipments))

            items = []
            for shipment in shipments:
                client = clients.get(shipment.client_id)
                if client is None:
                    logger.warning(
                        "Shipment %d references missing client %d",
                        shipment.shipment_id,
                        shipment.client_id,
                    )
                items.append(
                    self._compose(
                        ShipmentListItem,
                        shipment,
                        truck=trucks.get(shipment.truck_id),
                        driver=drivers.get(shipment.driver_id),
                        client_name=client.client_name if client else None,
                    )
                )
            return items

        except Exception as e:
            logger.error("Database error listing shipments: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve shipments. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_shipment(self, db: AsyncSession, shipment_id: int) -> ShipmentDetail:
        """
        One shipment with its truck and driver.

        Raises:
            NotFoundError: no shipment with this numeric id (→ 404)
        """
        try:
            shipment = await self._get_or_404(db, shipment_id)
            return await self._detail(db, ShipmentDetail, shipment)
        except NotFoundError:
            raise
        except Exception as e:
            logger.error(
                "Database error fetching shipment %s: %s", shipment_id, str(e), exc_info=True
            )
            raise DatabaseError(
                message="Could not retrieve the shipment. Please try again.",
                context={"shipment_id": shipment_id},
            )

    # ── Update / Delete ───────────────────────────────────────────────────

    async def update_shipment(
        self, db: AsyncSession, shipment_id: int, payload: ShipmentUpdate
    ) -> ShipmentUpdatedResponse:
        """
        Apply the allow-listed fields present in the request body.

        Fields omitted from the body are left untouched. An explicit null is
        ignored except for specialInstructions, where it clears the value.
        """
        try:
            shipment = await self._get_or_404(db, shipment_id)

            changes = {
                field: value
                for field, value in payload.model_dump(exclude_unset=True).items()
                if value is not None or field in _CLEARABLE_FIELDS
            }
            for field, value in changes.items():
                setattr(shipment, field, value)

            if changes:
                await db.flush()
                await db.refresh(shipment)
                logger.info(
                    "Shipment %d updated: %s", shipment_id, ", ".join(sorted(changes))
                )

            return await self._detail(db, ShipmentUpdatedResponse, shipment)

        except FleetDeskError:
            raise
        except Exception as e:
            logger.error("Error updating shipment %s: %s", shipment_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the shipment. Please try again.",
                context={"shipment_id": shipment_id},
            )

    async def delete_shipment(
        self, db: AsyncSession, shipment_id: int
    ) -> ShipmentDeletedResponse:
        """Delete one shipment. Trucks, drivers, clients and bills are untouched."""
        try:
            shipment = await self._get_or_404(db, shipment_id)
            snapshot = ShipmentResponse.model_validate(shipment)
            await db.delete(shipment)
            await db.flush()
            logger.info("Shipment %d deleted", shipment_id)
            return ShipmentDeletedResponse(shipment=snapshot)

        except FleetDeskError:
            raise
        except Exception as e:
            logger.error("Error deleting shipment %s: %s", shipment_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the shipment. Please try again.",
                context={"shipment_id": shipment_id},
            )

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _get_or_404(self, db: AsyncSession, shipment_id: int) -> Shipment:
        result = await db.execute(
            select(Shipment).where(Shipment.shipment_id == shipment_id)
        )
        shipment = result.scalar_one_or_none()
        if shipment is None:
            raise NotFoundError(resource="Shipment", resource_id=shipment_id)
        return shipment

    async def _find_truck(self, db: AsyncSession, truck_id: Optional[int]) -> Optional[Truck]:
        if truck_id is None:
            return None
        result = await db.execute(select(Truck).where(Truck.truck_id == truck_id))
        return result.scalar_one_or_none()

    async def _find_driver(self, db: AsyncSession, driver_id: Optional[int]) -> Optional[Driver]:
        if driver_id is None:
            return None
        result = await db.execute(select(Driver).where(Driver.driver_id == driver_id))
        return result.scalar_one_or_none()

    async def _find_client(self, db: AsyncSession, client_id: int) -> Optional[Client]:
        result = await db.execute(select(Client).where(Client.client_id == client_id))
        return result.scalar_one_or_none()

    async def _claim(self, db: AsyncSession, model, id_column, entity_id: int, **extra) -> bool:
        """
        Flip an Available truck/driver to Not Available in one statement.

        Returns False when no row matched, i.e. the entity is gone or was
        claimed by someone else since it was checked.
        """
        stmt = (
            update(model)
            .where(id_column == entity_id, model.availability_status == AVAILABLE)
            .values(availability_status=NOT_AVAILABLE, **extra)
        )
        result = await db.execute(stmt)
        return result.rowcount == 1

    async def _trucks_by_id(self, db: AsyncSession, ids: Iterable[Optional[int]]) -> Dict[int, Truck]:
        wanted = {i for i in ids if i is not None}
        if not wanted:
            return {}
        result = await db.execute(select(Truck).where(Truck.truck_id.in_(wanted)))
        return {truck.truck_id: truck for truck in result.scalars().all()}

    async def _drivers_by_id(self, db: AsyncSession, ids: Iterable[Optional[int]]) -> Dict[int, Driver]:
        wanted = {i for i in ids if i is not None}
        if not wanted:
            return {}
        result = await db.execute(select(Driver).where(Driver.driver_id.in_(wanted)))
        return {driver.driver_id: driver for driver in result.scalars().all()}

    async def _clients_by_id(self, db: AsyncSession, ids: Iterable[int]) -> Dict[int, Client]:
        wanted = set(ids)
        if not wanted:
            return {}
        result = await db.execute(select(Client).where(Client.client_id.in_(wanted)))
        return {client.client_id: client for client in result.scalars().all()}

    async def _detail(
        self, db: AsyncSession, view: Type[ShipmentView], shipment: Shipment
    ) -> ShipmentView:
        truck = await self._find_truck(db, shipment.truck_id)
        driver = await self._find_driver(db, shipment.driver_id)
        return self._compose(view, shipment, truck=truck, driver=driver)

    @staticmethod
    def _compose(
        view: Type[ShipmentView],
        shipment: Shipment,
        truck: Optional[Truck] = None,
        driver: Optional[Driver] = None,
        **extra,
    ) -> ShipmentView:
        data = ShipmentResponse.model_validate(shipment).model_dump()
        data["truck"] = TruckResponse.model_validate(truck) if truck else None
        data["driver"] = DriverResponse.model_validate(driver) if driver else None
        data.update(extra)
        return view.model_validate(data)


# ── Singleton Instance ────────────────────────────────────────────────────
shipment_service = ShipmentService()
