"""Billing use cases run by the system rather than by a caller."""

from .scan_overdue_invoices_use_case import (
    OverdueInvoice,
    ScanOverdueInvoicesResponse,
    ScanOverdueInvoicesUseCase,
)

__all__ = [
    "OverdueInvoice",
    "ScanOverdueInvoicesResponse",
    "ScanOverdueInvoicesUseCase",
]
