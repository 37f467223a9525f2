from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from rent_service.app.repositories.audit_event_repository import IAuditEventRepository
from rent_service.domain.entities import AuditEvent


class AuditEventRepository(IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        self.session.add(audit_event)
        await self.session.flush()
        await self.session.refresh(audit_event)
        return audit_event

    async def create_once(self, audit_event: AuditEvent) -> bool:
        # Savepoint keeps the outer transaction usable after a duplicate
        try:
            async with self.session.begin_nested():
                self.session.add(audit_event)
        except IntegrityError:
            return False
        return True
