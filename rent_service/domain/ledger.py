"""
Invoice ledger operations.

Entries are addressed by invoice_id, never by raw list index, and every
lookup failure is a typed Error instead of a sentinel value.
"""

from datetime import datetime
from typing import Callable, List, Optional, Sequence
from uuid import UUID

from rent_service.domain.billing_schedule import ScheduledInvoice
from rent_service.domain.entities import InvoiceEntry, InvoiceEntryStatus
from rent_service.libs.result import Error, Result, Return


def entry_not_found(invoice_id: str) -> Error:
    return Error(
        "INVOICE_ENTRY_NOT_FOUND",
        f"Invoice {invoice_id} does not exist under this rent",
    )


def find_entry(entries: Sequence[InvoiceEntry], invoice_id: str) -> Optional[InvoiceEntry]:
    for entry in entries:
        if entry.invoice_id == invoice_id:
            return entry
    return None


def find_payable_entry(
    entries: Sequence[InvoiceEntry], invoice_id: str
) -> Result[InvoiceEntry]:
    """Entry matching invoice_id that is not verified yet."""
    entry = find_entry(entries, invoice_id)
    if entry is None or entry.status == InvoiceEntryStatus.verified:
        return Return.err(
            Error(
                "INVOICE_ENTRY_NOT_FOUND",
                "Unpaid invoice with such id does not exist",
            )
        )
    return Return.ok(entry)


def update_entry(
    entries: Sequence[InvoiceEntry],
    invoice_id: str,
    mutator: Callable[[InvoiceEntry], None],
) -> Result[InvoiceEntry]:
    """Apply `mutator` to the entry with `invoice_id` in place."""
    entry = find_entry(entries, invoice_id)
    if entry is None:
        return Return.err(entry_not_found(invoice_id))
    mutator(entry)
    return Return.ok(entry)


def initial_entry(entries: Sequence[InvoiceEntry]) -> Optional[InvoiceEntry]:
    for entry in entries:
        if entry.position == 0:
            return entry
    return None


def record_payment(entry: InvoiceEntry, proof_key: str, paid_at: datetime) -> None:
    entry.paid_at = paid_at
    entry.proof_of_paid = proof_key
    entry.status = InvoiceEntryStatus.pending
    # A resubmission after rejection awaits a fresh verification
    entry.verified_by = None


def record_verification(
    entry: InvoiceEntry, admin_id: UUID, approved: bool, paid_amount=None
) -> None:
    entry.verified_by = admin_id
    entry.status = InvoiceEntryStatus.verified if approved else InvoiceEntryStatus.rejected
    if paid_amount is not None:
        entry.price = paid_amount


def build_recurring_entries(
    ledger_id: UUID,
    existing: Sequence[InvoiceEntry],
    schedule: Sequence[ScheduledInvoice],
) -> List[InvoiceEntry]:
    """Turn a schedule into ledger rows positioned after the existing ones."""
    start = max((entry.position for entry in existing), default=-1) + 1
    return [
        InvoiceEntry(
            ledger_id=ledger_id,
            position=start + offset,
            invoice_id=scheduled.invoice_id,
            release_date=scheduled.release_date,
        )
        for offset, scheduled in enumerate(schedule)
    ]


def has_pending_entries(entries: Sequence[InvoiceEntry]) -> bool:
    return any(entry.status == InvoiceEntryStatus.pending for entry in entries)
