# Routes package init
"""
FleetDesk Backend — API Routes Package
=======================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - shipments.py:  /api/shipments          (create, list, get, update, delete)
    - drivers.py:    /api/drivers            (create, list, list available)
    - trucks.py:     /api/trucks             (create, list, list available)
    - clients.py:    /api/clients            (create, list)
    - bills.py:      /api/bills              (create, list)
    - health.py:     /healthcheck            (service health check)

Routes stay thin: extract request data, call a service, return its result.
Status codes for failures come from the global exception handlers in main.py.
"""
