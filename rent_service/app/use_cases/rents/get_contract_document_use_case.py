"""
Get Contract Document Use Case

Resolves the stored BAA of a rent to a temporary download URL.
"""

from uuid import UUID

from rent_service.app.services.object_storage import ObjectStorage, resolve_bounded
from rent_service.app.services.unit_of_work import UnitOfWork
from rent_service.domain.actors import Actor
from rent_service.domain.errors import not_rent_owner, rent_not_found
from rent_service.libs.result import Error, Result, Return

from .access import can_view
from .dtos import ContractDocumentResponse


class GetContractDocumentUseCase:
    def __init__(self, uow: UnitOfWork, storage: ObjectStorage, storage_timeout: float):
        self.uow = uow
        self.storage = storage
        self.storage_timeout = storage_timeout

    async def execute(self, actor: Actor, rent_id: UUID) -> Result[ContractDocumentResponse]:
        async with self.uow:
            rent = await self.uow.rents.get_by_id(rent_id)
            if rent is None:
                return Return.err(rent_not_found())

            if not can_view(actor, rent):
                return Return.err(not_rent_owner())

            key = rent.contract_document

        if not key:
            return Return.err(
                Error("CONTRACT_DOCUMENT_NOT_FOUND", "Rent has no contract document yet")
            )

        resolved = await resolve_bounded(self.storage, key, timeout=self.storage_timeout)
        if resolved.is_err():
            return resolved
        return Return.ok(ContractDocumentResponse(url=resolved.value))
