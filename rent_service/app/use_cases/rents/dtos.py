"""
Rent Use Case DTOs (Data Transfer Objects)

All Response classes for the rent domain, plus the converters from
entities.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from rent_service.domain.entities import InvoiceEntry, Rent


def _iso(moment: Optional[datetime]) -> Optional[str]:
    return moment.isoformat() if moment is not None else None


# ============================================================================
# Shared views
# ============================================================================


class InvoiceEntryView(BaseModel):
    """One ledger entry"""

    invoice_id: str
    position: int
    release_date: str
    paid_at: Optional[str]
    proof_of_paid: Optional[str]
    verified_by: Optional[str]
    status: str
    price: Optional[Decimal]

    @classmethod
    def from_entry(cls, entry: InvoiceEntry) -> "InvoiceEntryView":
        return cls(
            invoice_id=entry.invoice_id,
            position=entry.position,
            release_date=entry.release_date.isoformat(),
            paid_at=_iso(entry.paid_at),
            proof_of_paid=entry.proof_of_paid,
            verified_by=str(entry.verified_by) if entry.verified_by else None,
            status=entry.status.value,
            price=entry.price,
        )


class RentView(BaseModel):
    """Contract summary"""

    id: str
    customer_id: str
    space_id: str
    provider_id: str
    price: Decimal
    paid_attempt: bool
    status: str
    ttl: Optional[str]
    contract_document: Optional[str]
    handled_by: List[str]
    created_at: str

    @classmethod
    def from_rent(cls, rent: Rent) -> "RentView":
        return cls(
            id=str(rent.id),
            customer_id=str(rent.customer_id),
            space_id=str(rent.space_id),
            provider_id=str(rent.provider_id),
            price=rent.price,
            paid_attempt=rent.paid_attempt,
            status=rent.status.value,
            ttl=_iso(rent.ttl),
            contract_document=rent.contract_document,
            handled_by=list(rent.handled_by),
            created_at=rent.created_at.isoformat(),
        )


# ============================================================================
# Response DTOs
# ============================================================================


class RequestRentResponse(BaseModel):
    """Response for request rent use case"""

    rent: RentView
    ledger_id: str
    space_name: str
    initial_invoice: InvoiceEntryView
    nominal: Decimal


class PayInvoiceResponse(BaseModel):
    """Response for pay invoice use case"""

    invoice_id: str
    invoice_status: str
    rent_status: str
    proof_of_paid: str


class ProvisionRentResponse(BaseModel):
    """Response for provision rent use case"""

    rent_status: str
    invoice_status: str


class ActivateRentResponse(BaseModel):
    """Response for activate rent use case"""

    rent_status: str
    ttl: str
    contract_document: str
    scheduled_invoices: List[InvoiceEntryView]


class VerifyInvoiceResponse(BaseModel):
    """Response for verify invoice use case"""

    invoice_id: str
    invoice_status: str
    rent_status: str


class RentDetailResponse(BaseModel):
    """Response for get rent use case"""

    rent: RentView
    history: List[InvoiceEntryView]


class ListRentsResponse(BaseModel):
    """Response for list rents use case"""

    rents: List[RentView]


class ContractDocumentResponse(BaseModel):
    """Response for contract document use case"""

    url: str
