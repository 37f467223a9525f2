"""
Rent Entity

The rental contract linking a customer, a space and the providing
organisation. Aggregate root of the rental core.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import Numeric
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from rent_service.domain.base import utcnow

from .enums import RentStatus


class Rent(SQLModel, table=True):
    """
    Rent entity - the contract lifecycle aggregate.

    Business Rules:
    - price is a snapshot of the space price at request time
    - paid_attempt is true while a payment proof awaits verification
    - ttl is set iff status == active (first recurring release date)
    - contract_document (BAA) is an object-storage key, set at activation
    - handled_by is an ordered set of identities that touched the contract
    - never hard-deleted
    """

    __tablename__ = "rents"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    customer_id: UUID = Field(nullable=False, index=True)
    space_id: UUID = Field(foreign_key="spaces.id", nullable=False)
    provider_id: UUID = Field(nullable=False, index=True)

    price: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))
    paid_attempt: bool = Field(default=False)
    status: RentStatus = Field(default=RentStatus.unpaid)

    ttl: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    contract_document: Optional[str] = Field(default=None, max_length=512)
    handled_by: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_rent_status", "status"),
        Index("idx_rent_paid_attempt", "paid_attempt"),
    )

    def mark_handled_by(self, identity: UUID) -> None:
        """Append an identity to handled_by, keeping first-touch order."""
        key = str(identity)
        if key not in self.handled_by:
            # Reassign so the JSON column is flagged dirty
            self.handled_by = [*self.handled_by, key]
