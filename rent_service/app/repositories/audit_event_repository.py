from abc import ABC, abstractmethod

from rent_service.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        pass

    @abstractmethod
    async def create_once(self, audit_event: AuditEvent) -> bool:
        """Create an event covered by a unique index; False when an equal one is already recorded"""
        pass
