"""
FleetDesk Backend — Shipment Service Tests
===========================================

What:  Tests for the shipment assignment workflow and shipment CRUD.
How:   Runs ShipmentService against the in-memory SQLite database; the
       storage-failure path uses a mocked session.

What we test:
    ✅ Shipment without truck/driver is created pending, fleet untouched
    ✅ Valid truck + driver are claimed and the driver gets assignedTruck
    ✅ Missing / unavailable truck or driver and missing client are refused
    ✅ Business rules are checked truck → driver → client
    ✅ A lost claim race refuses the request and leaves no shipment behind
    ✅ Listing resolves truck, driver and client name (null when missing)
    ✅ Update honours the allow-list; delete removes only the shipment
    ✅ Storage failures surface as DatabaseError, logged with their traceback
"""

import logging

import pytest
from unittest.mock import AsyncMock, patch

from sqlalchemy import func, select, update
from sqlalchemy.exc import OperationalError

from fleetdesk.exceptions import BusinessRuleError, DatabaseError, NotFoundError
from fleetdesk.models.client import Client
from fleetdesk.models.common import AVAILABLE, NOT_AVAILABLE
from fleetdesk.models.driver import Driver
from fleetdesk.models.shipment import Shipment
from fleetdesk.models.truck import Truck
from fleetdesk.schemas.shipment import ShipmentCreate, ShipmentUpdate
from fleetdesk.schemas.truck import TruckCreate
from fleetdesk.services.sequence_service import next_sequence
from fleetdesk.services.shipment_service import (
    DRIVER_UNAVAILABLE,
    INVALID_CLIENT,
    INVALID_DRIVER,
    INVALID_TRUCK,
    TRUCK_UNAVAILABLE,
    ShipmentService,
)
from fleetdesk.services.truck_service import truck_service


async def _count_shipments(db) -> int:
    return (await db.execute(select(func.count()).select_from(Shipment))).scalar_one()


async def _truck(db, truck_id: int) -> Truck:
    return (await db.execute(select(Truck).where(Truck.truck_id == truck_id))).scalar_one()


async def _driver(db, driver_id: int) -> Driver:
    return (await db.execute(select(Driver).where(Driver.driver_id == driver_id))).scalar_one()


class TestCreateShipment:
    """Tests for the create_shipment workflow."""

    def setup_method(self):
        self.service = ShipmentService()

    @pytest.mark.asyncio
    async def test_without_truck_or_driver(self, db_session, fleet, shipment_payload):
        """No truckId/driverId: shipment is pending and the fleet is untouched."""
        result = await self.service.create_shipment(
            db_session, ShipmentCreate.model_validate(shipment_payload)
        )

        assert result.message == "Shipment created successfully."
        assert result.shipment.shipment_id == 1
        assert result.shipment.status == "pending"
        assert result.shipment.truck_id is None
        assert result.shipment.driver_id is None

        assert (await _truck(db_session, 1)).availability_status == AVAILABLE
        driver = await _driver(db_session, 1)
        assert driver.availability_status == AVAILABLE
        assert driver.assigned_truck is None

    @pytest.mark.asyncio
    async def test_claims_truck_and_driver(self, db_session, fleet, shipment_payload):
        """Both references become Not Available; driver records the truck."""
        shipment_payload.update(truckId=1, driverId=1)

        result = await self.service.create_shipment(
            db_session, ShipmentCreate.model_validate(shipment_payload)
        )

        assert result.shipment.truck_id == 1
        assert result.shipment.driver_id == 1
        assert (await _truck(db_session, 1)).availability_status == NOT_AVAILABLE
        driver = await _driver(db_session, 1)
        assert driver.availability_status == NOT_AVAILABLE
        assert driver.assigned_truck == 1

    @pytest.mark.asyncio
    async def test_shipment_ids_increase(self, db_session, fleet, shipment_payload):
        payload = ShipmentCreate.model_validate(shipment_payload)
        first = await self.service.create_shipment(db_session, payload)
        second = await self.service.create_shipment(db_session, payload)
        assert second.shipment.shipment_id == first.shipment.shipment_id + 1

    @pytest.mark.asyncio
    async def test_unknown_truck(self, db_session, fleet, shipment_payload):
        shipment_payload["truckId"] = 99

        with pytest.raises(BusinessRuleError) as exc_info:
            await self.service.create_shipment(
                db_session, ShipmentCreate.model_validate(shipment_payload)
            )

        assert exc_info.value.message == INVALID_TRUCK
        assert await _count_shipments(db_session) == 0

    @pytest.mark.asyncio
    async def test_unavailable_truck(self, db_session, fleet, shipment_payload):
        """A truck that is already Not Available is refused; nothing is written."""
        await truck_service.create_truck(
            db_session,
            TruckCreate.model_validate(
                {"truckNumber": "KA-05-ZZ-0001", "availabilityStatus": NOT_AVAILABLE}
            ),
        )
        shipment_payload.update(truckId=2, driverId=1)

        with pytest.raises(BusinessRuleError) as exc_info:
            await self.service.create_shipment(
                db_session, ShipmentCreate.model_validate(shipment_payload)
            )

        assert exc_info.value.message == TRUCK_UNAVAILABLE
        assert await _count_shipments(db_session) == 0
        assert (await _driver(db_session, 1)).availability_status == AVAILABLE

    @pytest.mark.asyncio
    async def test_unknown_driver(self, db_session, fleet, shipment_payload):
        shipment_payload["driverId"] = 42

        with pytest.raises(BusinessRuleError) as exc_info:
            await self.service.create_shipment(
                db_session, ShipmentCreate.model_validate(shipment_payload)
            )

        assert exc_info.value.message == INVALID_DRIVER

    @pytest.mark.asyncio
    async def test_driver_taken_by_earlier_shipment(self, db_session, fleet, shipment_payload):
        """Second shipment asking for the same driver is refused."""
        shipment_payload["driverId"] = 1
        await self.service.create_shipment(
            db_session, ShipmentCreate.model_validate(shipment_payload)
        )

        with pytest.raises(BusinessRuleError) as exc_info:
            await self.service.create_shipment(
                db_session, ShipmentCreate.model_validate(shipment_payload)
            )

        assert exc_info.value.message == DRIVER_UNAVAILABLE
        assert await _count_shipments(db_session) == 1

    @pytest.mark.asyncio
    async def test_unknown_client(self, db_session, fleet, shipment_payload):
        shipment_payload["clientId"] = 7

        with pytest.raises(BusinessRuleError) as exc_info:
            await self.service.create_shipment(
                db_session, ShipmentCreate.model_validate(shipment_payload)
            )

        assert exc_info.value.message == INVALID_CLIENT
        assert await _count_shipments(db_session) == 0

    @pytest.mark.asyncio
    async def test_truck_checked_before_driver_and_client(self, db_session, shipment_payload):
        """With every reference wrong, the truck failure is the one reported."""
        shipment_payload.update(truckId=5, driverId=5, clientId=5)

        with pytest.raises(BusinessRuleError) as exc_info:
            await self.service.create_shipment(
                db_session, ShipmentCreate.model_validate(shipment_payload)
            )

        assert exc_info.value.message == INVALID_TRUCK

    @pytest.mark.asyncio
    async def test_driver_checked_before_client(self, db_session, shipment_payload):
        shipment_payload.update(driverId=5, clientId=5)

        with pytest.raises(BusinessRuleError) as exc_info:
            await self.service.create_shipment(
                db_session, ShipmentCreate.model_validate(shipment_payload)
            )

        assert exc_info.value.message == INVALID_DRIVER

    @pytest.mark.asyncio
    async def test_lost_claim_leaves_no_shipment(self, db_session, fleet, shipment_payload):
        """
        Truck passes the check but is taken before the claim runs.

        The rival write lands between the availability check and the
        conditional update; the real claim then matches no row, the request
        fails with the availability error, and once the transaction is
        rolled back no shipment remains.
        """
        shipment_payload["truckId"] = 1

        async def allocate_after_rival_claim(db, key):
            await db.execute(
                update(Truck)
                .where(Truck.truck_id == 1)
                .values(availability_status=NOT_AVAILABLE)
            )
            return await next_sequence(db, key)

        with patch(
            "fleetdesk.services.shipment_service.next_sequence",
            side_effect=allocate_after_rival_claim,
        ):
            with pytest.raises(BusinessRuleError) as exc_info:
                await self.service.create_shipment(
                    db_session, ShipmentCreate.model_validate(shipment_payload)
                )

        assert exc_info.value.message == TRUCK_UNAVAILABLE
        await db_session.rollback()
        assert await _count_shipments(db_session) == 0

    @pytest.mark.asyncio
    async def test_claim_requires_available_row(self, db_session, fleet):
        """The conditional update matches only rows that are still Available."""
        assert await self.service._claim(db_session, Truck, Truck.truck_id, 1) is True
        assert await self.service._claim(db_session, Truck, Truck.truck_id, 1) is False
        assert await self.service._claim(db_session, Truck, Truck.truck_id, 99) is False


class TestReadShipments:

    def setup_method(self):
        self.service = ShipmentService()

    @pytest.mark.asyncio
    async def test_list_resolves_related_records(self, db_session, fleet, shipment_payload):
        shipment_payload.update(truckId=1, driverId=1)
        await self.service.create_shipment(
            db_session, ShipmentCreate.model_validate(shipment_payload)
        )

        items = await self.service.list_shipments(db_session)

        assert len(items) == 1
        assert items[0].client_name == "Acme Freight"
        assert items[0].truck.truck_number == "KA-01-AB-1234"
        assert items[0].driver.name == "Ravi Kumar"

    @pytest.mark.asyncio
    async def test_list_with_deleted_client(self, db_session, fleet, shipment_payload):
        """A shipment whose client is gone is still listed, with clientName null."""
        await self.service.create_shipment(
            db_session, ShipmentCreate.model_validate(shipment_payload)
        )
        client = (
            await db_session.execute(select(Client).where(Client.client_id == 1))
        ).scalar_one()
        await db_session.delete(client)
        await db_session.flush()

        items = await self.service.list_shipments(db_session)

        assert len(items) == 1
        assert items[0].client_name is None
        assert items[0].truck is None
        assert items[0].driver is None

    @pytest.mark.asyncio
    async def test_list_empty(self, db_session):
        assert await self.service.list_shipments(db_session) == []

    @pytest.mark.asyncio
    async def test_get_is_repeatable(self, db_session, fleet, shipment_payload):
        """Reading a shipment twice returns the same record and changes nothing."""
        shipment_payload["truckId"] = 1
        await self.service.create_shipment(
            db_session, ShipmentCreate.model_validate(shipment_payload)
        )

        first = await self.service.get_shipment(db_session, 1)
        second = await self.service.get_shipment(db_session, 1)

        assert first == second
        assert first.truck.truck_id == 1
        assert first.driver is None

    @pytest.mark.asyncio
    async def test_get_missing(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_shipment(db_session, 404)
        assert exc_info.value.message == "Shipment not found."

    @pytest.mark.asyncio
    async def test_list_storage_failure(self, mock_db_session):
        """Unexpected database errors are reported as DatabaseError."""
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )

        with pytest.raises(DatabaseError):
            await self.service.list_shipments(mock_db_session)

    @pytest.mark.asyncio
    async def test_get_storage_failure_logs_traceback(self, mock_db_session, caplog):
        """The failure is logged with its traceback before the generic error."""
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )

        with caplog.at_level(logging.ERROR, logger="fleetdesk.services.shipment_service"):
            with pytest.raises(DatabaseError) as exc_info:
                await self.service.get_shipment(mock_db_session, 7)

        assert exc_info.value.message == "Could not retrieve the shipment. Please try again."
        record = next(r for r in caplog.records if "fetching shipment 7" in r.getMessage())
        assert record.exc_info is not None
        assert record.exc_info[0] is OperationalError


class TestUpdateAndDeleteShipments:

    def setup_method(self):
        self.service = ShipmentService()

    @pytest.mark.asyncio
    async def test_update_allow_list(self, db_session, fleet, shipment_payload):
        """Only allow-listed fields change; clientId/truckId in the body are ignored."""
        await self.service.create_shipment(
            db_session, ShipmentCreate.model_validate(shipment_payload)
        )

        result = await self.service.update_shipment(
            db_session,
            1,
            ShipmentUpdate.model_validate(
                {
                    "shipmentName": "Steel coils (split)",
                    "status": "delivered",
                    "clientId": 99,
                    "truckId": 1,
                }
            ),
        )

        assert result.message == "Shipment updated successfully."
        assert result.shipment_name == "Steel coils (split)"
        assert result.status == "delivered"
        assert result.client_id == 1
        assert result.truck_id is None
        assert (await _truck(db_session, 1)).availability_status == AVAILABLE

    @pytest.mark.asyncio
    async def test_update_clears_special_instructions(self, db_session, fleet, shipment_payload):
        shipment_payload["specialInstructions"] = "Keep dry"
        await self.service.create_shipment(
            db_session, ShipmentCreate.model_validate(shipment_payload)
        )

        result = await self.service.update_shipment(
            db_session,
            1,
            ShipmentUpdate.model_validate({"specialInstructions": None, "cargoType": None}),
        )

        assert result.special_instructions is None
        assert result.cargo_type == "Metal"

    @pytest.mark.asyncio
    async def test_update_missing(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.update_shipment(
                db_session, 3, ShipmentUpdate.model_validate({"status": "cancelled"})
            )

    @pytest.mark.asyncio
    async def test_delete(self, db_session, fleet, shipment_payload):
        """Delete removes the shipment only; truck and driver keep their state."""
        shipment_payload.update(truckId=1, driverId=1)
        await self.service.create_shipment(
            db_session, ShipmentCreate.model_validate(shipment_payload)
        )

        result = await self.service.delete_shipment(db_session, 1)

        assert result.shipment.shipment_id == 1
        assert await _count_shipments(db_session) == 0
        assert (await _truck(db_session, 1)).availability_status == NOT_AVAILABLE
        with pytest.raises(NotFoundError):
            await self.service.get_shipment(db_session, 1)

    @pytest.mark.asyncio
    async def test_delete_missing(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.delete_shipment(db_session, 1)
