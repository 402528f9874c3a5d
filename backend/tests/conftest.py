"""
FleetDesk Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Service and route tests run against an in-memory SQLite database
       (aiosqlite); a few error-path tests use a mocked AsyncSession.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── db_engine:        in-memory SQLite engine with every table created
    ├── db_session:       AsyncSession bound to db_engine
    ├── session_factory:  sessionmaker bound to db_engine (for route tests)
    ├── test_client:      HTTPX AsyncClient, one transaction per request
    ├── file_engine:      file-backed SQLite, one connection per session
    ├── concurrent_client: HTTPX AsyncClient over file_engine (parallel requests)
    ├── mock_db_session:  Mock database session (no real DB needed)
    └── sample payloads:  client / truck / driver / shipment request bodies
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

# Settings are read at import time; override them before importing fleetdesk
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import fleetdesk.models  # noqa: F401
from fleetdesk.database import Base, get_db_session
from fleetdesk.models.common import AVAILABLE
from fleetdesk.schemas.client import ClientCreate
from fleetdesk.schemas.driver import DriverCreate
from fleetdesk.schemas.truck import TruckCreate
from fleetdesk.services.client_service import client_service
from fleetdesk.services.driver_service import driver_service
from fleetdesk.services.truck_service import truck_service


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A private in-memory database per test.

    StaticPool keeps one connection open, so every session sees the same
    in-memory database instead of a fresh empty one.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """
    Session for calling services directly.

    Services only flush, so writes made in a test stay visible to later
    queries on the same session without a commit.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute = AsyncMock(side_effect=OperationalError(...))
        await shipment_service.list_shipments(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@asynccontextmanager
async def _client_for(factory) -> AsyncIterator[AsyncClient]:
    """App client whose database dependency is bound to `factory`."""
    from fleetdesk.main import create_app

    async def override_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db_session] = override_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    The database dependency is overridden with the same commit/rollback
    semantics as fleetdesk.database.get_db_session, bound to the test engine.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/healthcheck")
            assert response.status_code == 200
    """
    async with _client_for(session_factory) as client:
        yield client


@pytest_asyncio.fixture
async def file_engine(tmp_path):
    """
    File-backed SQLite engine with one connection per session.

    Used by tests that fire concurrent requests. Every transaction starts
    with BEGIN IMMEDIATE, so SQLite serializes writers through its database
    lock (the busy timeout keeps waiters queued) instead of failing them.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'fleetdesk.db'}",
        connect_args={"timeout": 30},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _manual_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def concurrent_client(file_engine):
    """HTTP client whose requests each get their own database connection."""
    factory = async_sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False)
    async with _client_for(factory) as client:
        yield client

# ══════════════════════════════════════════════════════════════════════════
# Sample Data
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def client_payload():
    return {
        "clientName": "Acme Freight",
        "email": "ops@acmefreight.com",
        "phoneNumber": "5550100",
        "address": "1 Harbour Road",
    }


@pytest.fixture
def truck_payload():
    return {"truckNumber": "KA-01-AB-1234", "model": "Tata 1109", "capacity": 7.5}


@pytest.fixture
def driver_payload():
    return {
        "name": "Ravi Kumar",
        "licenseNumber": "DL-0420110012345",
        "phoneNumber": "9876543210",
        "address": "12 Depot Lane",
        "salary": 32000,
        "experience": "6 years",
    }


@pytest.fixture
def shipment_payload():
    """Shipment body without truck/driver; tests add them as needed."""
    return {
        "clientId": 1,
        "shipmentName": "Steel coils",
        "pickupLocation": "Chennai Port",
        "deliveryLocation": "Bengaluru Warehouse",
        "cargoType": "Metal",
        "cargoWeight": 1200,
        "departureDate": "2026-11-01T08:00:00Z",
        "arrivalDate": "2026-11-02T18:00:00Z",
    }


@pytest_asyncio.fixture
async def fleet(db_session, client_payload, truck_payload, driver_payload):
    """
    One client, one truck and one driver, all Available and committed.

    Returns the created response models keyed by entity.
    """
    client = await client_service.create_client(
        db_session, ClientCreate.model_validate(client_payload)
    )
    truck = await truck_service.create_truck(
        db_session, TruckCreate.model_validate(truck_payload)
    )
    driver = await driver_service.create_driver(
        db_session, DriverCreate.model_validate(driver_payload)
    )
    assert truck.truck.availability_status == AVAILABLE
    await db_session.commit()
    return {"client": client.client, "truck": truck.truck, "driver": driver.driver}
