# Middleware package init
"""
FleetDesk Backend — Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: assigns the correlation ID used in logs and error bodies
    2. Logging: one access line per request with status and duration

    Responses travel back through the same chain in reverse, so the
    X-Request-ID header is present on every response, errors included.
"""
