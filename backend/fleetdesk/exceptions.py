"""
FleetDesk Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    FleetDeskError (base)
    ├── BusinessRuleError   → 400 Bad Request   {"success": false, "message"}
    ├── NotFoundError       → 404 Not Found     {"error"}
    └── DatabaseError       → 500 Server Error  {"error"} (generic text only)

Field-level validation is not part of this hierarchy: FastAPI raises
RequestValidationError from the Pydantic schemas, and main.py reshapes it
into {"errors": [{"field", "message"}]}.
"""

from typing import Any, Dict, Optional


class FleetDeskError(Exception):
    """
    Base exception for all FleetDesk application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class BusinessRuleError(FleetDeskError):
    """
    Raised when a request is well-formed but violates a business rule.

    When:    A referenced truck, driver or client is missing; a truck or
             driver is not available; a license number is already registered.
    HTTP:    400 Bad Request

    Only the first violated rule is reported. Checks run in a fixed order
    and stop at the first failure.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(FleetDeskError):
    """
    Raised when the target of a lookup, update or delete does not exist.

    HTTP:    404 Not Found

    Example:
        NotFoundError("Shipment", 42) → message "Shipment not found."
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=f"{resource} not found.", context=ctx)
        self.resource = resource


class DatabaseError(FleetDeskError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The original
    exception type and the entity involved are kept in `context` and logged
    server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
