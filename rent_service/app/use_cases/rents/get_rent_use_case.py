"""
Get Rent Use Case

Returns a rent with its full invoice ledger.
"""

from uuid import UUID

from rent_service.app.services.unit_of_work import UnitOfWork
from rent_service.domain.actors import Actor
from rent_service.domain.errors import not_rent_owner, rent_not_found
from rent_service.libs.result import Result, Return

from .access import can_view
from .dtos import InvoiceEntryView, RentDetailResponse, RentView


class GetRentUseCase:
    """
    Use case for reading one rent.

    Business Rules:
    - Admins see every rent
    - Providers see rents of their own provider
    - Customers see their own rents
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: Actor, rent_id: UUID) -> Result[RentDetailResponse]:
        async with self.uow:
            rent = await self.uow.rents.get_by_id(rent_id)
            if rent is None:
                return Return.err(rent_not_found())

            if not can_view(actor, rent):
                return Return.err(not_rent_owner())

            invoice = await self.uow.invoices.get_by_rent_id(rent.id)
            entries = await self.uow.invoices.get_entries(invoice.id) if invoice else []

            return Return.ok(
                RentDetailResponse(
                    rent=RentView.from_rent(rent),
                    history=[InvoiceEntryView.from_entry(entry) for entry in entries],
                )
            )
