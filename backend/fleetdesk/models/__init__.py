"""
FleetDesk Backend — ORM Models
===============================

Importing this package registers every table on Base.metadata, which
Alembic autogenerate and database.create_tables rely on.
"""

from fleetdesk.models.bill import Bill
from fleetdesk.models.client import Client
from fleetdesk.models.counter import Counter
from fleetdesk.models.driver import Driver
from fleetdesk.models.shipment import Shipment
from fleetdesk.models.truck import Truck

__all__ = ["Bill", "Client", "Counter", "Driver", "Shipment", "Truck"]
