# Services package init
"""
FleetDesk Backend — Services Layer
===================================

What:  Business logic layer sitting between routes (HTTP) and database.
How:   Services receive the request's AsyncSession, apply business rules,
       flush their writes and return response schemas. Commit/rollback is
       owned by the session dependency.

Service Inventory:
    - sequence_service: numeric id allocation (atomic counter upsert)
    - ShipmentService:  shipment creation workflow and shipment reads/writes
    - DriverService:    driver registration and listings
    - TruckService:     truck registration and listings
    - ClientService:    client registration and listing
    - BillService:      bill issuing and listing
"""
