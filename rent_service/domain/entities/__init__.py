"""
Rent Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    InvoiceEntryStatus,
    RentStatus,
)

# Export all entities
from .space import Space
from .rent import Rent
from .invoice import Invoice, InvoiceEntry
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "InvoiceEntryStatus",
    "RentStatus",
    # Entities
    "Space",
    "Rent",
    "Invoice",
    "InvoiceEntry",
    "AuditEvent",
]
