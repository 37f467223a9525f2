"""
Pay Invoice Use Case

A customer submits proof of payment for one ledger entry, either the
initial request entry or a released monthly entry.
"""

import logging
import mimetypes
from uuid import UUID

from rent_service.app.services.clock import Clock
from rent_service.app.services.object_storage import ObjectStorage, store_bounded
from rent_service.app.services.unit_of_work import UnitOfWork
from rent_service.domain import ledger
from rent_service.domain.actors import Actor, Customer
from rent_service.domain.billing_schedule import epoch_millis
from rent_service.domain.entities import AuditEvent, RentStatus
from rent_service.domain.errors import insufficient_role, not_rent_owner, rent_not_found
from rent_service.libs.result import Error, Result, Return

from .dtos import PayInvoiceResponse

logger = logging.getLogger(__name__)


class PayInvoiceUseCase:
    """
    Use case for uploading proof of payment.

    Business Rules:
    - Only the customer who owns the rent can pay
    - Target entry must exist and not be verified; a pending or rejected
      entry can be paid again, which overwrites paid_at/proof_of_paid in
      place (no new ledger entry)
    - Initial entry: rent must be unpaid/pending; rent moves to pending
    - Monthly entry: rent must be active and the entry released
      (release_date <= now); rent status is left as active
    - paid_attempt is set in both cases
    """

    def __init__(
        self,
        uow: UnitOfWork,
        storage: ObjectStorage,
        clock: Clock,
        storage_timeout: float,
    ):
        self.uow = uow
        self.storage = storage
        self.clock = clock
        self.storage_timeout = storage_timeout

    async def execute(
        self,
        actor: Actor,
        rent_id: UUID,
        invoice_id: str,
        proof: bytes,
        content_type: str,
    ) -> Result[PayInvoiceResponse]:
        if not isinstance(actor, Customer):
            return Return.err(insufficient_role("pay an invoice"))

        async with self.uow:
            rent = await self.uow.rents.get_for_update(rent_id)
            if rent is None:
                return Return.err(rent_not_found())

            if rent.customer_id != actor.id:
                return Return.err(not_rent_owner())

            invoice = await self.uow.invoices.get_by_rent_id(rent.id)
            if invoice is None:
                return Return.err(Error("INVOICE_NOT_FOUND", "Rent has no invoice"))

            entries = await self.uow.invoices.get_entries(invoice.id)
            found = ledger.find_payable_entry(entries, invoice_id)
            if found.is_err():
                return found
            entry = found.value

            now = self.clock.now()

            if entry.is_initial:
                if rent.status not in (RentStatus.unpaid, RentStatus.pending):
                    return Return.err(
                        Error("RENT_NOT_PENDING", "Rent is no longer awaiting its initial payment")
                    )
            else:
                if rent.status != RentStatus.active:
                    return Return.err(Error("RENT_NOT_ACTIVE", "Rent is not active"))
                if entry.release_date > now:
                    return Return.err(
                        Error(
                            "INVOICE_NOT_YET_RELEASED",
                            "Invoice release date has not yet arrived",
                        )
                    )

            extension = mimetypes.guess_extension(content_type) or ""
            stored = await store_bounded(
                self.storage,
                proof,
                content_type,
                f"proof/{rent.provider_id}/proof-{rent.id}-{epoch_millis(now)}{extension}",
                timeout=self.storage_timeout,
            )
            if stored.is_err():
                return stored

            ledger.record_payment(entry, stored.value, now)
            await self.uow.invoices.update_entry(entry)

            rent.paid_attempt = True
            if entry.is_initial:
                rent.status = RentStatus.pending
            rent.updated_at = now
            await self.uow.rents.update(rent)

            await self.uow.audit_events.create(
                AuditEvent(
                    rent_id=rent.id,
                    actor_id=actor.id,
                    action="invoice_paid",
                    subject=entry.invoice_id,
                    event_metadata={"proof_of_paid": stored.value},
                )
            )

            await self.uow.commit()

            logger.info(f"Proof uploaded for invoice {entry.invoice_id} of rent {rent.id}")

            return Return.ok(
                PayInvoiceResponse(
                    invoice_id=entry.invoice_id,
                    invoice_status=entry.status.value,
                    rent_status=rent.status.value,
                    proof_of_paid=stored.value,
                )
            )
