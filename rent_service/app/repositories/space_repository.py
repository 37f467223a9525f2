from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from rent_service.domain.entities import Space


class ISpaceRepository(ABC):
    """Space repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, space_id: UUID) -> Optional[Space]:
        """Get space by ID"""
        pass

    @abstractmethod
    async def claim(self, space_id: UUID, customer_id: UUID) -> bool:
        """
        Mark a published, unclaimed space as rented by customer_id.

        Returns:
            True if this call claimed the space, False if it was already
            claimed or is not published
        """
        pass
