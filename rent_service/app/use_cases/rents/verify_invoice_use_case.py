"""
Verify Invoice Use Case

An admin verifies or rejects the payment of a monthly ledger entry.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from rent_service.app.services.clock import Clock
from rent_service.app.services.unit_of_work import UnitOfWork
from rent_service.domain import ledger
from rent_service.domain.actors import Actor, Admin
from rent_service.domain.entities import AuditEvent, InvoiceEntryStatus, RentStatus
from rent_service.domain.errors import insufficient_role, rent_not_found
from rent_service.libs.result import Error, Result, Return

from .dtos import VerifyInvoiceResponse

logger = logging.getLogger(__name__)


class VerifyInvoiceUseCase:
    """
    Use case for verifying a recurring invoice payment.

    Business Rules:
    - Only admins can verify
    - Entry 0 is never verified here; it goes through provisioning
      (INITIAL_INVOICE_NOT_VERIFIABLE, whatever its status)
    - Already verified entries cannot be verified again
      (INVOICE_ALREADY_VERIFIED)
    - action=True -> verified, action=False -> rejected
    - Rent status never changes; paid_attempt is cleared once no entry
      is pending anymore
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(
        self,
        actor: Actor,
        rent_id: UUID,
        invoice_id: str,
        action: bool,
        paid_amount: Optional[Decimal] = None,
    ) -> Result[VerifyInvoiceResponse]:
        if not isinstance(actor, Admin):
            return Return.err(insufficient_role("verify an invoice"))

        async with self.uow:
            rent = await self.uow.rents.get_for_update(rent_id)
            if rent is None:
                return Return.err(rent_not_found())

            invoice = await self.uow.invoices.get_by_rent_id(rent.id)
            entries = await self.uow.invoices.get_entries(invoice.id) if invoice else []

            entry = ledger.find_entry(entries, invoice_id)
            if entry is None:
                return Return.err(ledger.entry_not_found(invoice_id))

            if entry.is_initial:
                return Return.err(
                    Error(
                        "INITIAL_INVOICE_NOT_VERIFIABLE",
                        "The initial invoice is verified through provisioning",
                    )
                )

            if entry.status == InvoiceEntryStatus.verified:
                return Return.err(
                    Error(
                        "INVOICE_ALREADY_VERIFIED",
                        "Invoice has been paid and verified",
                    )
                )

            if rent.status != RentStatus.active:
                return Return.err(Error("RENT_NOT_ACTIVE", "Rent is not active"))

            updated = ledger.update_entry(
                entries,
                invoice_id,
                lambda target: ledger.record_verification(target, actor.id, action, paid_amount),
            )
            if updated.is_err():
                return updated
            entry = updated.value
            await self.uow.invoices.update_entry(entry)

            if rent.paid_attempt and not ledger.has_pending_entries(entries):
                rent.paid_attempt = False
                rent.updated_at = self.clock.now()
                await self.uow.rents.update(rent)

            await self.uow.audit_events.create(
                AuditEvent(
                    rent_id=rent.id,
                    actor_id=actor.id,
                    action="invoice_verified" if action else "invoice_rejected",
                    subject=entry.invoice_id,
                    event_metadata={
                        "paid_amount": str(paid_amount) if paid_amount is not None else None
                    },
                )
            )

            await self.uow.commit()

            logger.info(
                f"Invoice {entry.invoice_id} of rent {rent.id} {entry.status.value} by admin {actor.id}"
            )

            return Return.ok(
                VerifyInvoiceResponse(
                    invoice_id=entry.invoice_id,
                    invoice_status=entry.status.value,
                    rent_status=rent.status.value,
                )
            )
