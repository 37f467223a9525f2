"""
AuditEvent Entity

Immutable log of contract lifecycle events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from rent_service.domain.base import utcnow

OVERDUE_ACTION = "invoice_overdue"


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of rent/invoice transitions.

    Business Rules:
    - Immutable (never updated or deleted)
    - actor_id is null for system events (overdue scanner)
    - At most one invoice_overdue event per (rent_id, subject)
    - subject holds the ledger invoice_id when the event targets one entry
    - Metadata stores additional context (status change, amounts, keys)
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    rent_id: Optional[UUID] = Field(default=None, index=True)
    actor_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g., "rent_activated"
    subject: Optional[str] = Field(default=None, max_length=64)
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_rent_action", "rent_id", "action"),
        Index("idx_audit_action_subject", "action", "subject"),
        Index(
            "uq_audit_overdue_subject",
            "rent_id",
            "subject",
            unique=True,
            sqlite_where=text(f"action = '{OVERDUE_ACTION}'"),
            postgresql_where=text(f"action = '{OVERDUE_ACTION}'"),
        ),
    )
