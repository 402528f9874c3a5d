"""
FleetDesk Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn fleetdesk.main:app).

Application Architecture:
    ┌───────────────────────────────────────────────────────────┐
    │                       FastAPI App                         │
    │                                                           │
    │  Middleware Chain:                                        │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐              │
    │  │  Req ID  │→│ Logging  │→│ GZip │→│ CORS │              │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘              │
    │                                                           │
    │  Routes:                                                  │
    │  /api/shipments  /api/drivers  /api/trucks                │
    │  /api/clients    /api/bills    /healthcheck               │
    │                                                           │
    │  Exception Handlers:                                      │
    │  ┌─────────────────────────────────────────────────────┐  │
    │  │ Fields→400 │ Rules→400 │ NotFound→404 │ other→500   │  │
    │  └─────────────────────────────────────────────────────┘  │
    └───────────────────────────────────────────────────────────┘

Error bodies:
    400 field validation   {"errors": [{"field", "message"}], "request_id"}
    400 business rule      {"success": false, "message", "request_id"}
    404 not found          {"error": "<Resource> not found.", "request_id"}
    500 anything else      {"error": "An internal server error occurred.", "request_id"}
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from fleetdesk import __version__
from fleetdesk.config import settings
from fleetdesk.database import create_tables, dispose_engine
from fleetdesk.exceptions import (
    BusinessRuleError,
    DatabaseError,
    FleetDeskError,
    NotFoundError,
)
from fleetdesk.middleware.logging import RequestLoggingMiddleware
from fleetdesk.middleware.request_id import RequestIDMiddleware, current_request_id
from fleetdesk.routes import bills, clients, drivers, health, shipments, trucks

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal server error occurred."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] fleetdesk.services.shipment_service: ...

    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Create missing tables when DB_CREATE_TABLES is set
           (deployments normally run `alembic upgrade head` instead)

    Shutdown:
        1. Dispose database engine (close all pooled connections)
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("FleetDesk Backend %s starting up...", __version__)

    if settings.db_create_tables:
        await create_tables()
        logger.info("Database tables ensured")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("FleetDesk Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _field_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    """
    Flatten Pydantic errors into [{"field", "message"}].

    The field is the last name in the error location (the camelCase key the
    client sent). Messages raised by the schema validators are passed through
    unchanged; Pydantic's own messages are reworded for missing keys.
    """
    errors = []
    for error in exc.errors():
        names = [part for part in error.get("loc", ()) if isinstance(part, str)]
        field = names[-1] if names else "body"
        message = str(error.get("msg", "Invalid value."))
        if error.get("type") == "missing":
            message = f"{field} is required."
        elif message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({"field": field, "message": message})
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestValidationError  → 400 {"errors": [...]}
        BusinessRuleError       → 400 {"success": false, "message"}
        NotFoundError           → 404 {"error"}
        DatabaseError           → 500 {"error"} (generic)
        FleetDeskError (base)   → 500 {"error"} (generic)
        Exception (fallback)    → 500 {"error"} (generic)

    Internal details (SQL, tracebacks, exception context) are logged
    server-side and never included in a response.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Every field that failed validation, in one response."""
        rid = current_request_id(request)
        errors = _field_errors(exc)
        logger.info(
            "[%s] Rejected %s %s: %s",
            rid,
            request.method,
            request.url.path,
            ", ".join(e["field"] for e in errors),
        )
        return JSONResponse(
            status_code=400,
            content={"errors": errors, "request_id": rid},
        )

    @app.exception_handler(BusinessRuleError)
    async def handle_business_rule(request: Request, exc: BusinessRuleError):
        """Well-formed request that violates a business rule."""
        rid = current_request_id(request)
        logger.warning("[%s] Business rule violated: %s | %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": exc.message, "request_id": rid},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = current_request_id(request)
        return JSONResponse(
            status_code=404,
            content={"error": exc.message, "request_id": rid},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Storage failure: generic message to the client, details logged."""
        rid = current_request_id(request)
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={"error": INTERNAL_ERROR_MESSAGE, "request_id": rid},
        )

    @app.exception_handler(FleetDeskError)
    async def handle_application_error(request: Request, exc: FleetDeskError):
        rid = current_request_id(request)
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={"error": INTERNAL_ERROR_MESSAGE, "request_id": rid},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: the traceback is logged, never returned."""
        rid = current_request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": INTERNAL_ERROR_MESSAGE, "request_id": rid},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns a fresh instance each call; tests build their own app and
    override the database dependency on it.
    """
    app = FastAPI(
        title="FleetDesk API",
        description=(
            "Logistics back office: clients, drivers, trucks, shipments and bills. "
            "Creating a shipment checks and claims the requested truck and driver."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(shipments.router)
    app.include_router(drivers.router)
    app.include_router(trucks.router)
    app.include_router(clients.router)
    app.include_router(bills.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
