from abc import ABC, abstractmethod

from rent_service.app.repositories.audit_event_repository import IAuditEventRepository
from rent_service.app.repositories.invoice_repository import IInvoiceRepository
from rent_service.app.repositories.rent_repository import IRentRepository
from rent_service.app.repositories.space_repository import ISpaceRepository


class UnitOfWork(ABC):
    """
    Abstract UnitOfWork - defines repository access and transaction management.

    Rent and its Invoice ledger are only ever mutated inside one unit of
    work; leaving the context without commit() rolls everything back.
    """

    # Repository properties (initialized in __aenter__)
    spaces: ISpaceRepository
    rents: IRentRepository
    invoices: IInvoiceRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
