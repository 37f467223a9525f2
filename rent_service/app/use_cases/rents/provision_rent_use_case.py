"""
Provision Rent Use Case

An admin approves (or rejects) the initial payment of a pending rent.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from rent_service.app.services.clock import Clock
from rent_service.app.services.unit_of_work import UnitOfWork
from rent_service.domain import ledger
from rent_service.domain.actors import Actor, Admin
from rent_service.domain.entities import AuditEvent, RentStatus
from rent_service.domain.errors import insufficient_role, rent_not_found
from rent_service.libs.result import Error, Result, Return

from .dtos import ProvisionRentResponse

logger = logging.getLogger(__name__)


class ProvisionRentUseCase:
    """
    Use case for provisioning a rent after its initial payment.

    Business Rules:
    - Only admins can provision
    - Rent must be pending with paid_attempt set (RENT_NOT_PENDING)
    - Entry 0 must carry a proof of payment (PROOF_OF_PAYMENT_MISSING)
    - Approve: entry 0 verified, rent provisioned
    - Reject: entry 0 rejected, rent stays pending for a resubmission
    - Both clear paid_attempt and record the admin in handled_by
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(
        self,
        actor: Actor,
        rent_id: UUID,
        approve: bool = True,
        paid_amount: Optional[Decimal] = None,
    ) -> Result[ProvisionRentResponse]:
        if not isinstance(actor, Admin):
            return Return.err(insufficient_role("provision a rent"))

        async with self.uow:
            rent = await self.uow.rents.get_for_update(rent_id)
            if rent is None:
                return Return.err(rent_not_found())

            if rent.status != RentStatus.pending or not rent.paid_attempt:
                return Return.err(
                    Error("RENT_NOT_PENDING", "Rent has no payment awaiting provisioning")
                )

            invoice = await self.uow.invoices.get_by_rent_id(rent.id)
            entries = await self.uow.invoices.get_entries(invoice.id) if invoice else []
            initial = ledger.initial_entry(entries)
            if initial is None or not initial.proof_of_paid:
                return Return.err(
                    Error("PROOF_OF_PAYMENT_MISSING", "Invoice payment proof is empty")
                )

            ledger.record_verification(initial, actor.id, approve, paid_amount)
            await self.uow.invoices.update_entry(initial)

            if approve:
                rent.status = RentStatus.provisioned
            rent.paid_attempt = False
            rent.mark_handled_by(actor.id)
            rent.updated_at = self.clock.now()
            await self.uow.rents.update(rent)

            await self.uow.audit_events.create(
                AuditEvent(
                    rent_id=rent.id,
                    actor_id=actor.id,
                    action="rent_provisioned" if approve else "initial_invoice_rejected",
                    subject=initial.invoice_id,
                    event_metadata={
                        "paid_amount": str(paid_amount) if paid_amount is not None else None
                    },
                )
            )

            await self.uow.commit()

            logger.info(
                f"Rent {rent.id} initial invoice {initial.status.value} by admin {actor.id}"
            )

            return Return.ok(
                ProvisionRentResponse(
                    rent_status=rent.status.value,
                    invoice_status=initial.status.value,
                )
            )
