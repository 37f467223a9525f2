from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from rent_service.app.repositories.invoice_repository import IInvoiceRepository
from rent_service.domain.entities import Invoice, InvoiceEntry, InvoiceEntryStatus


class InvoiceRepository(IInvoiceRepository):
    """Invoice ledger repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_rent_id(self, rent_id: UUID) -> Optional[Invoice]:
        """Get the ledger attached to a rent"""
        stmt = select(Invoice).where(Invoice.rent_id == rent_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_entries(self, ledger_id: UUID) -> List[InvoiceEntry]:
        """Get ledger entries ordered by position"""
        stmt = (
            select(InvoiceEntry)
            .where(InvoiceEntry.ledger_id == ledger_id)
            .order_by(col(InvoiceEntry.position))
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, invoice: Invoice, entries: Sequence[InvoiceEntry]) -> Invoice:
        """Create a ledger with its initial entries"""
        self.session.add(invoice)
        await self.session.flush()
        self.session.add_all(list(entries))
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def add_entries(self, entries: Sequence[InvoiceEntry]) -> List[InvoiceEntry]:
        """Append entries to an existing ledger"""
        self.session.add_all(list(entries))
        await self.session.flush()
        return list(entries)

    async def update_entry(self, entry: InvoiceEntry) -> InvoiceEntry:
        """Persist changes to one entry"""
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def find_released_entries(
        self,
        rent_ids: Sequence[UUID],
        statuses: Sequence[InvoiceEntryStatus],
        released_before: datetime,
    ) -> List[Tuple[UUID, InvoiceEntry]]:
        """Join entries to their ledger to report the owning rent"""
        if not rent_ids:
            return []
        stmt = (
            select(Invoice.rent_id, InvoiceEntry)
            .join(Invoice, col(InvoiceEntry.ledger_id) == col(Invoice.id))
            .where(
                col(Invoice.rent_id).in_(list(rent_ids)),
                col(InvoiceEntry.position) >= 1,
                col(InvoiceEntry.status).in_(list(statuses)),
                col(InvoiceEntry.release_date) <= released_before,
            )
            .order_by(col(InvoiceEntry.release_date), col(InvoiceEntry.position))
        )
        result = await self.session.exec(stmt)
        return [(rent_id, entry) for rent_id, entry in result.all()]
