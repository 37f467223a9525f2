"""
Rent Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class RentStatus(str, Enum):
    """Contract lifecycle status"""

    unpaid = "unpaid"
    pending = "pending"
    provisioned = "provisioned"
    active = "active"
    # Reserved: no transition produces these yet
    suspend = "suspend"
    dismantle = "dismantle"


class InvoiceEntryStatus(str, Enum):
    """Status of one billing entry in an invoice ledger"""

    unpaid = "unpaid"
    pending = "pending"
    verified = "verified"
    rejected = "rejected"
