from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from rent_service.domain.entities import Rent, RentStatus


class IRentRepository(ABC):
    """Rent repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, rent_id: UUID) -> Optional[Rent]:
        """Get rent by ID"""
        pass

    @abstractmethod
    async def get_for_update(self, rent_id: UUID) -> Optional[Rent]:
        """Get rent by ID, locking the row for the current transaction"""
        pass

    @abstractmethod
    async def list(
        self,
        customer_id: Optional[UUID] = None,
        provider_id: Optional[UUID] = None,
        paid_attempt: Optional[bool] = None,
    ) -> List[Rent]:
        """List rents matching every given filter, newest first"""
        pass

    @abstractmethod
    async def list_by_status(self, status: RentStatus) -> List[Rent]:
        """List all rents in a status"""
        pass

    @abstractmethod
    async def create(self, rent: Rent) -> Rent:
        """Create a new rent"""
        pass

    @abstractmethod
    async def update(self, rent: Rent) -> Rent:
        """Update existing rent"""
        pass
