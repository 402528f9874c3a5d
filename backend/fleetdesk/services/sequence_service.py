"""
FleetDesk Backend — Sequence Generator
=======================================

What:  Hands out human-readable numeric ids (1, 2, 3, ...) per entity type.
How:   One atomic upsert on the `counters` table:

           INSERT INTO counters (name, sequence) VALUES (:key, 1)
           ON CONFLICT (name) DO UPDATE SET sequence = counters.sequence + 1
           RETURNING sequence

       The first call for a key creates its row with sequence 1; later calls
       increment it. The database serializes concurrent upserts on the same
       row, so no two callers ever observe the same value, across workers
       and across instances sharing the database.

Callers allocate the id first and only then build the record, so a failed
allocation never leaves a half-initialised row behind. The increment runs in
the caller's transaction: if the request rolls back, so does the counter, and
the number goes to the next caller. A number attached to a committed record
is never handed out again.
"""

import logging

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.models.counter import Counter

logger = logging.getLogger(__name__)

CLIENT_KEY = "clientId"
DRIVER_KEY = "driverId"
TRUCK_KEY = "truckId"
SHIPMENT_KEY = "shipmentId"
BILL_KEY = "billId"

_INSERT_BUILDERS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def next_sequence(db: AsyncSession, key: str) -> int:
    """
    Returns the next value of the `key` sequence.

    Raises:
        NotImplementedError: the bound database has no upsert builder
        Any SQLAlchemy error from the statement, unchanged
    """
    dialect = db.get_bind().dialect.name
    try:
        insert = _INSERT_BUILDERS[dialect]
    except KeyError:
        raise NotImplementedError(f"No sequence upsert for dialect '{dialect}'")

    stmt = (
        insert(Counter)
        .values(name=key, sequence=1)
        .on_conflict_do_update(
            index_elements=[Counter.name],
            set_={"sequence": Counter.sequence + 1},
        )
        .returning(Counter.sequence)
    )
    result = await db.execute(stmt)
    value = result.scalar_one()
    logger.debug("Allocated %s=%d", key, value)
    return value
