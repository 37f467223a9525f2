"""
List Rents Use Case

Role-scoped listing of rents, optionally limited to those with a payment
awaiting verification.
"""

from rent_service.app.services.unit_of_work import UnitOfWork
from rent_service.domain.actors import Actor, Customer, Provider
from rent_service.libs.result import Result, Return

from .dtos import ListRentsResponse, RentView


class ListRentsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: Actor, pending: bool = False) -> Result[ListRentsResponse]:
        filters = {"paid_attempt": True} if pending else {}
        if isinstance(actor, Provider):
            filters["provider_id"] = actor.provider_id
        elif isinstance(actor, Customer):
            filters["customer_id"] = actor.id

        async with self.uow:
            rents = await self.uow.rents.list(**filters)
            return Return.ok(ListRentsResponse(rents=[RentView.from_rent(r) for r in rents]))
