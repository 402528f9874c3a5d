"""
FleetDesk Backend — Concurrent Request Tests
=============================================

What:  Requests fired in parallel against one database: numeric ids stay
       unique and a truck goes to exactly one shipment.
How:   asyncio.gather over the HTTP API. The concurrent_client fixture gives
       every request its own connection to a file-backed SQLite database, so
       the transactions are real and the database arbitrates between them.
"""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fleetdesk.services.sequence_service import SHIPMENT_KEY, next_sequence


class TestConcurrentShipmentCreation:

    @pytest.mark.asyncio
    async def test_parallel_creates_get_distinct_ids(
        self, concurrent_client, client_payload, shipment_payload
    ):
        """Five simultaneous creates: five 201s and ids 1..5, no repeats."""
        response = await concurrent_client.post("/api/clients", json=client_payload)
        assert response.status_code == 201

        responses = await asyncio.gather(
            *(
                concurrent_client.post(
                    "/api/shipments", json={**shipment_payload, "shipmentName": f"Load {n}"}
                )
                for n in range(5)
            )
        )

        assert [r.status_code for r in responses] == [201] * 5
        ids = {r.json()["shipment"]["shipmentId"] for r in responses}
        assert ids == {1, 2, 3, 4, 5}
        listed = (await concurrent_client.get("/api/shipments")).json()
        assert sorted(s["shipmentId"] for s in listed) == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_same_truck_claimed_once(
        self, concurrent_client, client_payload, truck_payload, shipment_payload
    ):
        """Two creates race for one truck: one wins, the other is refused."""
        for path, body in (("/api/clients", client_payload), ("/api/trucks", truck_payload)):
            response = await concurrent_client.post(path, json=body)
            assert response.status_code == 201
        shipment_payload["truckId"] = 1

        responses = await asyncio.gather(
            concurrent_client.post("/api/shipments", json=shipment_payload),
            concurrent_client.post("/api/shipments", json=shipment_payload),
        )

        assert sorted(r.status_code for r in responses) == [201, 400]
        refused = next(r for r in responses if r.status_code == 400)
        assert refused.json()["message"] == "Truck is not available."
        assert len((await concurrent_client.get("/api/shipments")).json()) == 1
        assert (await concurrent_client.get("/api/trucks/available")).json() == []


class TestConcurrentSequence:

    @pytest.mark.asyncio
    async def test_parallel_allocations_are_unique(self, file_engine):
        """Separate sessions allocating at once never see the same value."""
        factory = async_sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False)

        async def allocate():
            async with factory() as session:
                value = await next_sequence(session, SHIPMENT_KEY)
                await session.commit()
                return value

        values = await asyncio.gather(*(allocate() for _ in range(8)))

        assert sorted(values) == list(range(1, 9))
