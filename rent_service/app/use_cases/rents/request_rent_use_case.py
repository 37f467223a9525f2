"""
Request Rent Use Case

A customer requests a published, unclaimed space. Creates the Rent in
status unpaid and its Invoice ledger with the initial request entry.
"""

import logging
from uuid import UUID

from rent_service.app.services.clock import Clock
from rent_service.app.services.unit_of_work import UnitOfWork
from rent_service.domain.actors import Actor, Customer
from rent_service.domain.billing_schedule import initial_invoice_id
from rent_service.domain.entities import AuditEvent, Invoice, InvoiceEntry, Rent
from rent_service.domain.errors import insufficient_role
from rent_service.libs.result import Error, Result, Return

from .dtos import InvoiceEntryView, RentView, RequestRentResponse

logger = logging.getLogger(__name__)


class RequestRentUseCase:
    """
    Use case for requesting a rent on a space.

    Business Rules:
    - Only customers can request
    - Space must exist (SPACE_NOT_FOUND), be published and unclaimed
      (SPACE_NOT_PUBLISHED / SPACE_ALREADY_CLAIMED)
    - The space is claimed in the same transaction that creates the rent
    - Rent.price snapshots the space price
    - Ledger entry 0 is released immediately (release_date = now)
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(self, actor: Actor, space_id: UUID) -> Result[RequestRentResponse]:
        if not isinstance(actor, Customer):
            return Return.err(insufficient_role("request a rent"))

        async with self.uow:
            space = await self.uow.spaces.get_by_id(space_id)
            if space is None:
                return Return.err(Error("SPACE_NOT_FOUND", "No such space exist"))

            if not space.publish:
                return Return.err(
                    Error("SPACE_NOT_PUBLISHED", "This space is not for rent")
                )

            if space.rented_by is not None:
                return Return.err(
                    Error("SPACE_ALREADY_CLAIMED", "This space has already been rented")
                )

            # Conditional update; loses cleanly to a concurrent request
            claimed = await self.uow.spaces.claim(space.id, actor.id)
            if not claimed:
                return Return.err(
                    Error("SPACE_ALREADY_CLAIMED", "This space has already been rented")
                )

            now = self.clock.now()

            rent = Rent(
                customer_id=actor.id,
                space_id=space.id,
                provider_id=space.provider_id,
                price=space.price,
                handled_by=[str(actor.id)],
                created_at=now,
                updated_at=now,
            )
            await self.uow.rents.create(rent)

            invoice = Invoice(
                rent_id=rent.id,
                space_id=space.id,
                provider_id=space.provider_id,
                customer_id=actor.id,
                created_at=now,
            )
            entry = InvoiceEntry(
                ledger_id=invoice.id,
                position=0,
                invoice_id=initial_invoice_id(now),
                release_date=now,
            )
            await self.uow.invoices.create(invoice, [entry])

            await self.uow.audit_events.create(
                AuditEvent(
                    rent_id=rent.id,
                    actor_id=actor.id,
                    action="rent_requested",
                    subject=entry.invoice_id,
                    event_metadata={
                        "space_id": str(space.id),
                        "price": str(space.price),
                    },
                )
            )

            await self.uow.commit()

            logger.info(f"Rent {rent.id} requested on space {space.id}")

            return Return.ok(
                RequestRentResponse(
                    rent=RentView.from_rent(rent),
                    ledger_id=str(invoice.id),
                    space_name=space.name,
                    initial_invoice=InvoiceEntryView.from_entry(entry),
                    nominal=space.price,
                )
            )
