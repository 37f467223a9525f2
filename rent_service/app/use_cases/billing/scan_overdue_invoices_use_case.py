"""
Use Case: Scan Overdue Invoices

Finds released monthly invoices of active rents that are still unpaid
(or whose proof was rejected) and records an invoice_overdue event for
each. Never mutates rents or ledger entries.
"""

import logging
from typing import List

from pydantic import BaseModel

from rent_service.app.services.clock import Clock
from rent_service.app.services.unit_of_work import UnitOfWork
from rent_service.domain.entities import AuditEvent, InvoiceEntryStatus, RentStatus
from rent_service.domain.entities.audit_event import OVERDUE_ACTION
from rent_service.libs.result import Result, Return

logger = logging.getLogger(__name__)


class OverdueInvoice(BaseModel):
    rent_id: str
    invoice_id: str
    release_date: str
    status: str


class ScanOverdueInvoicesResponse(BaseModel):
    """Response DTO for ScanOverdueInvoicesUseCase"""

    overdue: List[OverdueInvoice]
    newly_flagged: int


class ScanOverdueInvoicesUseCase:
    """
    Scan ledgers for overdue monthly invoices.

    Business Logic:
    1. Collect active rents
    2. Find their entries at position >= 1 released at or before now
       with status unpaid or rejected
    3. Record one invoice_overdue audit event per entry; a unique index
       rejects entries already flagged by an earlier or concurrent scan
    4. Return every overdue entry and how many were newly flagged
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(self) -> Result[ScanOverdueInvoicesResponse]:
        async with self.uow:
            now = self.clock.now()

            rents = await self.uow.rents.list_by_status(RentStatus.active)
            if not rents:
                return Return.ok(ScanOverdueInvoicesResponse(overdue=[], newly_flagged=0))

            released = await self.uow.invoices.find_released_entries(
                [rent.id for rent in rents],
                [InvoiceEntryStatus.unpaid, InvoiceEntryStatus.rejected],
                released_before=now,
            )

            overdue = []
            newly_flagged = 0
            for rent_id, entry in released:
                overdue.append(
                    OverdueInvoice(
                        rent_id=str(rent_id),
                        invoice_id=entry.invoice_id,
                        release_date=entry.release_date.isoformat(),
                        status=entry.status.value,
                    )
                )

                flagged = await self.uow.audit_events.create_once(
                    AuditEvent(
                        rent_id=rent_id,
                        actor_id=None,  # System action, no specific user
                        action=OVERDUE_ACTION,
                        subject=entry.invoice_id,
                        event_metadata={
                            "release_date": entry.release_date.isoformat(),
                            "status": entry.status.value,
                            "detected_at": now.isoformat(),
                        },
                    )
                )
                if flagged:
                    newly_flagged += 1

            await self.uow.commit()

            logger.info(
                f"Overdue scan: {len(overdue)} overdue invoices, {newly_flagged} newly flagged"
            )

            return Return.ok(
                ScanOverdueInvoicesResponse(overdue=overdue, newly_flagged=newly_flagged)
            )
