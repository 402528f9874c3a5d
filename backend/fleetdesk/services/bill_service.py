"""
FleetDesk Backend — Bill Service
=================================

What:  Issues bills against an existing client and shipment, and lists them.
How:   billId is allocated from the Sequence Generator before the Bill row is
       built. Client and shipment are looked up by their opaque UUIDs; a
       missing reference is a business error (400), checked client first.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.exceptions import BusinessRuleError, DatabaseError, FleetDeskError
from fleetdesk.models.bill import Bill
from fleetdesk.models.client import Client
from fleetdesk.models.common import utcnow
from fleetdesk.models.shipment import Shipment
from fleetdesk.schemas.bill import BillCreate, BillCreatedResponse, BillResponse
from fleetdesk.services.sequence_service import BILL_KEY, next_sequence

logger = logging.getLogger(__name__)


class BillService:

    async def create_bill(self, db: AsyncSession, payload: BillCreate) -> BillCreatedResponse:
        """
        Raises:
            BusinessRuleError: client or shipment does not exist
            DatabaseError: storage failure
        """
        try:
            client = await db.get(Client, payload.client_id)
            if client is None:
                raise BusinessRuleError(
                    "Invalid Client ID. Client does not exist.",
                    {"client_id": str(payload.client_id)},
                )
            shipment = await db.get(Shipment, payload.shipment_id)
            if shipment is None:
                raise BusinessRuleError(
                    "Invalid Shipment ID. Shipment does not exist.",
                    {"shipment_id": str(payload.shipment_id)},
                )

            bill_id = await next_sequence(db, BILL_KEY)
            fields = payload.model_dump(exclude_none=True)
            fields.setdefault("issue_date", utcnow())
            fields.setdefault("payment_status", "pending")
            bill = Bill(bill_id=bill_id, **fields)
            db.add(bill)
            await db.flush()

        except FleetDeskError:
            raise
        except Exception as e:
            logger.error("Error creating bill: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the bill. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info(
            "Bill %d issued for shipment %d (total %.2f)",
            bill.bill_id,
            shipment.shipment_id,
            bill.total_amount,
        )
        return BillCreatedResponse(bill=BillResponse.model_validate(bill))

    async def list_bills(self, db: AsyncSession) -> List[BillResponse]:
        try:
            result = await db.execute(select(Bill).order_by(Bill.bill_id))
        except Exception as e:
            logger.error("Database error listing bills: %s", str(e), exc_info=True)
            raise DatabaseError(message="Could not retrieve bills. Please try again.")
        return [BillResponse.model_validate(b) for b in result.scalars().all()]


bill_service = BillService()
