"""
Invoice Entities

The billing ledger attached 1:1 to a Rent, and its ordered entries.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Numeric
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from rent_service.domain.base import utcnow

from .enums import InvoiceEntryStatus


class Invoice(SQLModel, table=True):
    """
    Invoice entity - ledger header, one per Rent.

    Business Rules:
    - Exactly one ledger per rent (rent_id is unique)
    - Entries are kept in invoice_entries, ordered by position
    """

    __tablename__ = "invoices"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    rent_id: UUID = Field(foreign_key="rents.id", nullable=False, unique=True)
    space_id: UUID = Field(nullable=False)
    provider_id: UUID = Field(nullable=False)
    customer_id: UUID = Field(nullable=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))


class InvoiceEntry(SQLModel, table=True):
    """
    InvoiceEntry entity - one billable line in a ledger.

    Business Rules:
    - position 0 is the initial request/deposit entry (invoice_id "req-...")
    - positions 1..N are recurring monthly entries ("rnt-..."),
      appended once, at activation
    - invoice_id is unique within its ledger
    - price overrides the contract price when set
    - resubmitting proof overwrites paid_at/proof_of_paid in place
    """

    __tablename__ = "invoice_entries"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    ledger_id: UUID = Field(foreign_key="invoices.id", nullable=False, index=True)
    position: int = Field(nullable=False)

    invoice_id: str = Field(max_length=64)
    release_date: datetime = Field(sa_column=Column(DateTime, nullable=False))
    paid_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    proof_of_paid: Optional[str] = Field(default=None, max_length=512)
    verified_by: Optional[UUID] = Field(default=None)
    status: InvoiceEntryStatus = Field(default=InvoiceEntryStatus.unpaid)
    price: Optional[Decimal] = Field(
        default=None, sa_column=Column(Numeric(18, 2), nullable=True)
    )

    __table_args__ = (
        Index("idx_entry_ledger_position", "ledger_id", "position", unique=True),
        Index("idx_entry_ledger_invoice_id", "ledger_id", "invoice_id", unique=True),
        Index("idx_entry_status_release", "status", "release_date"),
    )

    @property
    def is_initial(self) -> bool:
        return self.position == 0
