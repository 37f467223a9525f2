"""Rent lifecycle use cases: request, pay, provision, activate, verify and reads."""

from .activate_rent_use_case import ActivateRentUseCase
from .dtos import (
    ActivateRentResponse,
    ContractDocumentResponse,
    InvoiceEntryView,
    ListRentsResponse,
    PayInvoiceResponse,
    ProvisionRentResponse,
    RentDetailResponse,
    RentView,
    RequestRentResponse,
    VerifyInvoiceResponse,
)
from .get_contract_document_use_case import GetContractDocumentUseCase
from .get_rent_use_case import GetRentUseCase
from .list_rents_use_case import ListRentsUseCase
from .pay_invoice_use_case import PayInvoiceUseCase
from .provision_rent_use_case import ProvisionRentUseCase
from .request_rent_use_case import RequestRentUseCase
from .verify_invoice_use_case import VerifyInvoiceUseCase

__all__ = [
    "RequestRentUseCase",
    "RequestRentResponse",
    "PayInvoiceUseCase",
    "PayInvoiceResponse",
    "ProvisionRentUseCase",
    "ProvisionRentResponse",
    "ActivateRentUseCase",
    "ActivateRentResponse",
    "VerifyInvoiceUseCase",
    "VerifyInvoiceResponse",
    "GetRentUseCase",
    "RentDetailResponse",
    "ListRentsUseCase",
    "ListRentsResponse",
    "GetContractDocumentUseCase",
    "ContractDocumentResponse",
    "InvoiceEntryView",
    "RentView",
]
