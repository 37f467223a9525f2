from sqlmodel.ext.asyncio.session import AsyncSession

from rent_service.adapter.repositories.audit_event_repository import AuditEventRepository
from rent_service.adapter.repositories.invoice_repository import InvoiceRepository
from rent_service.adapter.repositories.rent_repository import RentRepository
from rent_service.adapter.repositories.space_repository import SpaceRepository
from rent_service.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.spaces = SpaceRepository(self.session)
        self.rents = RentRepository(self.session)
        self.invoices = InvoiceRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
