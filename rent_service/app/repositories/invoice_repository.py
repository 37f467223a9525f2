from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from rent_service.domain.entities import Invoice, InvoiceEntry, InvoiceEntryStatus


class IInvoiceRepository(ABC):
    """Invoice ledger repository interface - application layer"""

    @abstractmethod
    async def get_by_rent_id(self, rent_id: UUID) -> Optional[Invoice]:
        """Get the ledger attached to a rent"""
        pass

    @abstractmethod
    async def get_entries(self, ledger_id: UUID) -> List[InvoiceEntry]:
        """Get ledger entries ordered by position"""
        pass

    @abstractmethod
    async def create(self, invoice: Invoice, entries: Sequence[InvoiceEntry]) -> Invoice:
        """Create a ledger with its initial entries"""
        pass

    @abstractmethod
    async def add_entries(self, entries: Sequence[InvoiceEntry]) -> List[InvoiceEntry]:
        """Append entries to an existing ledger"""
        pass

    @abstractmethod
    async def update_entry(self, entry: InvoiceEntry) -> InvoiceEntry:
        """Persist changes to one entry"""
        pass

    @abstractmethod
    async def find_released_entries(
        self,
        rent_ids: Sequence[UUID],
        statuses: Sequence[InvoiceEntryStatus],
        released_before: datetime,
    ) -> List[Tuple[UUID, InvoiceEntry]]:
        """
        Get recurring entries (position >= 1) of the given rents' ledgers
        whose release_date is at or before `released_before` and whose
        status is one of `statuses`.

        Returns:
            List of (rent_id, entry) ordered by release_date
        """
        pass
