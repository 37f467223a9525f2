"""
Activate Rent Use Case

The provider uploads the signed contract document (BAA) for a provisioned
rent, which starts the recurring monthly billing schedule.
"""

import logging
import mimetypes
from uuid import UUID

from rent_service.app.services.clock import Clock
from rent_service.app.services.object_storage import ObjectStorage, store_bounded
from rent_service.app.services.unit_of_work import UnitOfWork
from rent_service.domain import ledger
from rent_service.domain.actors import Actor, Provider
from rent_service.domain.billing_schedule import (
    DEFAULT_RECURRING_COUNT,
    epoch_millis,
    schedule_recurring_invoices,
)
from rent_service.domain.entities import AuditEvent, RentStatus
from rent_service.domain.errors import insufficient_role, not_rent_owner, rent_not_found
from rent_service.libs.result import Error, Result, Return

from .dtos import ActivateRentResponse, InvoiceEntryView

logger = logging.getLogger(__name__)


class ActivateRentUseCase:
    """
    Use case for activating a provisioned rent.

    Business Rules:
    - Only a member of the owning provider can activate
    - Rent must be provisioned (RENT_NOT_PROVISIONED)
    - The contract document is stored first; a storage failure aborts
      before anything is written
    - Appends `recurring_count` monthly entries anchored at now
    - ttl = release date of the first new entry; status = active
    """

    def __init__(
        self,
        uow: UnitOfWork,
        storage: ObjectStorage,
        clock: Clock,
        storage_timeout: float,
        recurring_count: int = DEFAULT_RECURRING_COUNT,
    ):
        if recurring_count < 1:
            raise ValueError("recurring_count must be at least 1")
        self.uow = uow
        self.storage = storage
        self.clock = clock
        self.storage_timeout = storage_timeout
        self.recurring_count = recurring_count

    async def execute(
        self,
        actor: Actor,
        rent_id: UUID,
        document: bytes,
        content_type: str,
    ) -> Result[ActivateRentResponse]:
        if not isinstance(actor, Provider):
            return Return.err(insufficient_role("activate a rent"))

        async with self.uow:
            rent = await self.uow.rents.get_for_update(rent_id)
            if rent is None:
                return Return.err(rent_not_found())

            if rent.provider_id != actor.provider_id:
                return Return.err(not_rent_owner())

            if rent.status != RentStatus.provisioned:
                return Return.err(
                    Error("RENT_NOT_PROVISIONED", "Only a provisioned rent can be activated")
                )

            invoice = await self.uow.invoices.get_by_rent_id(rent.id)
            if invoice is None:
                return Return.err(Error("INVOICE_NOT_FOUND", "Rent has no invoice"))
            entries = await self.uow.invoices.get_entries(invoice.id)

            now = self.clock.now()

            extension = mimetypes.guess_extension(content_type) or ""
            stored = await store_bounded(
                self.storage,
                document,
                content_type,
                f"rent/{rent.provider_id}/baa-{rent.id}-{epoch_millis(now)}{extension}",
                timeout=self.storage_timeout,
            )
            if stored.is_err():
                return stored

            schedule = schedule_recurring_invoices(now, self.recurring_count)
            new_entries = ledger.build_recurring_entries(invoice.id, entries, schedule)
            await self.uow.invoices.add_entries(new_entries)

            rent.contract_document = stored.value
            rent.ttl = schedule[0].release_date
            rent.status = RentStatus.active
            rent.mark_handled_by(actor.id)
            rent.updated_at = now
            await self.uow.rents.update(rent)

            await self.uow.audit_events.create(
                AuditEvent(
                    rent_id=rent.id,
                    actor_id=actor.id,
                    action="rent_activated",
                    event_metadata={
                        "contract_document": stored.value,
                        "scheduled": [scheduled.invoice_id for scheduled in schedule],
                    },
                )
            )

            await self.uow.commit()

            logger.info(
                f"Rent {rent.id} activated with {len(new_entries)} recurring invoices"
            )

            return Return.ok(
                ActivateRentResponse(
                    rent_status=rent.status.value,
                    ttl=rent.ttl.isoformat(),
                    contract_document=stored.value,
                    scheduled_invoices=[InvoiceEntryView.from_entry(e) for e in new_entries],
                )
            )
