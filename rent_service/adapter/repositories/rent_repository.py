from typing import List, Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from rent_service.app.repositories.rent_repository import IRentRepository
from rent_service.domain.entities import Rent, RentStatus


class RentRepository(IRentRepository):
    """Rent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, rent_id: UUID) -> Optional[Rent]:
        """Get rent by ID"""
        stmt = select(Rent).where(Rent.id == rent_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_update(self, rent_id: UUID) -> Optional[Rent]:
        """Get rent by ID with a row lock (SQLite holds the database lock instead), refreshing identity-mapped state"""
        stmt = (
            select(Rent)
            .where(Rent.id == rent_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list(
        self,
        customer_id: Optional[UUID] = None,
        provider_id: Optional[UUID] = None,
        paid_attempt: Optional[bool] = None,
    ) -> List[Rent]:
        """List rents matching every given filter, newest first"""
        stmt = select(Rent)
        if customer_id is not None:
            stmt = stmt.where(Rent.customer_id == customer_id)
        if provider_id is not None:
            stmt = stmt.where(Rent.provider_id == provider_id)
        if paid_attempt is not None:
            stmt = stmt.where(Rent.paid_attempt == paid_attempt)
        stmt = stmt.order_by(col(Rent.created_at).desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_by_status(self, status: RentStatus) -> List[Rent]:
        """List all rents in a status"""
        stmt = select(Rent).where(Rent.status == status)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, rent: Rent) -> Rent:
        """Create a new rent"""
        self.session.add(rent)
        await self.session.flush()
        await self.session.refresh(rent)
        return rent

    async def update(self, rent: Rent) -> Rent:
        """Update existing rent"""
        self.session.add(rent)
        await self.session.flush()
        await self.session.refresh(rent)
        return rent
