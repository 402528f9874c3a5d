"""
FleetDesk Backend — Client Service
===================================

What:  Registers clients and lists them. clientId comes from the Sequence
       Generator.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.exceptions import DatabaseError
from fleetdesk.models.client import Client
from fleetdesk.schemas.client import ClientCreate, ClientCreatedResponse, ClientResponse
from fleetdesk.services.sequence_service import CLIENT_KEY, next_sequence

logger = logging.getLogger(__name__)


class ClientService:

    async def create_client(
        self, db: AsyncSession, payload: ClientCreate
    ) -> ClientCreatedResponse:
        try:
            client_id = await next_sequence(db, CLIENT_KEY)
            client = Client(client_id=client_id, **payload.model_dump())
            db.add(client)
            await db.flush()
        except Exception as e:
            logger.error("Error creating client: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the client. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Client %d created", client.client_id)
        return ClientCreatedResponse(client=ClientResponse.model_validate(client))

    async def list_clients(self, db: AsyncSession) -> List[ClientResponse]:
        try:
            result = await db.execute(select(Client).order_by(Client.client_id))
        except Exception as e:
            logger.error("Database error listing clients: %s", str(e), exc_info=True)
            raise DatabaseError(message="Could not retrieve clients. Please try again.")
        return [ClientResponse.model_validate(c) for c in result.scalars().all()]


client_service = ClientService()
