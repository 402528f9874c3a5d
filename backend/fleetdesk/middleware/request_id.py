"""
FleetDesk Backend — Request ID Middleware
==========================================

What:  Assigns a short correlation ID to each request and echoes it back.
How:   Reuses the client's X-Request-ID header when present, otherwise
       generates one; stores it in a ContextVar and in request.state.
Who:   Read by the access logger and by every exception handler, which
       include it as `request_id` in error bodies.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def current_request_id(request: Request) -> str:
    """ID of the request being handled, or "" outside the middleware."""
    return request_id_var.get("") or getattr(request.state, "request_id", "")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Use the client's X-Request-ID header if it sent one
        2. Otherwise generate the first 8 characters of a UUID4
        3. Store it in the ContextVar and request.state
        4. Add it to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
