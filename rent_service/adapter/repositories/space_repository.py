from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from rent_service.app.repositories.space_repository import ISpaceRepository
from rent_service.domain.entities import Space


class SpaceRepository(ISpaceRepository):
    """Space repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, space_id: UUID) -> Optional[Space]:
        """Get space by ID"""
        stmt = select(Space).where(Space.id == space_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def claim(self, space_id: UUID, customer_id: UUID) -> bool:
        """Claim with a conditional update so only one request can win"""
        stmt = (
            update(Space)
            .where(
                col(Space.id) == space_id,
                col(Space.rented_by).is_(None),
                col(Space.publish).is_(True),
            )
            .values(rented_by=customer_id)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
