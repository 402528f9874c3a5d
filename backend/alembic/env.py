"""
Alembic Migration Environment
==============================

Runs FleetDesk migrations against DATABASE_URL from fleetdesk.config, the
same URL the application uses. Online migrations go through an async
engine (asyncpg / aiosqlite) and hand a sync connection to Alembic.

    alembic upgrade head        apply every revision
    alembic upgrade head --sql  print the SQL instead (offline mode)
"""

import asyncio
import logging
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from fleetdesk.config import settings
from fleetdesk.database import Base
import fleetdesk.models  # noqa: F401  (registers every table on Base.metadata)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")


def _context_options() -> dict:
    return {
        "target_metadata": Base.metadata,
        "compare_type": True,
        # SQLite cannot ALTER most constraints in place
        "render_as_batch": settings.is_sqlite,
    }


def run_offline() -> None:
    context.configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_context_options(),
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **_context_options())
    with context.begin_transaction():
        context.run_migrations()


async def run_online() -> None:
    # Migrations are one-shot; no pool to keep around
    engine = create_async_engine(settings.database_url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    logger.info("Generating migration SQL (offline)")
    run_offline()
else:
    asyncio.run(run_online())
