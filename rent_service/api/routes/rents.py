"""
Rent API Routes

Contract lifecycle endpoints: request, pay, provision, activate, verify,
plus role-scoped reads.
"""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from rent_service.api.error import raise_for_error
from rent_service.app.services.clock import Clock
from rent_service.app.services.object_storage import ObjectStorage
from rent_service.app.services.unit_of_work import UnitOfWork
from rent_service.app.use_cases.rents import (
    ActivateRentResponse,
    ActivateRentUseCase,
    ContractDocumentResponse,
    GetContractDocumentUseCase,
    GetRentUseCase,
    ListRentsResponse,
    ListRentsUseCase,
    PayInvoiceResponse,
    PayInvoiceUseCase,
    ProvisionRentResponse,
    ProvisionRentUseCase,
    RentDetailResponse,
    RequestRentResponse,
    RequestRentUseCase,
    VerifyInvoiceResponse,
    VerifyInvoiceUseCase,
)
from rent_service.depends import (
    get_clock,
    get_current_actor,
    get_object_storage,
    get_unit_of_work,
)
from rent_service.domain.actors import Actor

router = APIRouter(prefix="/rents", tags=["Rent"])

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class RequestRentRequest(BaseModel):
    """Request rent HTTP request payload"""

    space_id: UUID = Field(..., description="Space to rent")


class ProvisionRentRequest(BaseModel):
    """
    Provision rent HTTP request payload

    approve=false rejects the initial payment proof instead.
    """

    approve: bool = Field(True, description="Approve the initial payment")
    paid_amount: Optional[Decimal] = Field(
        None, ge=0, description="Amount actually received, if it differs from the price"
    )


class VerifyInvoiceRequest(BaseModel):
    """Verify invoice HTTP request payload"""

    action: bool = Field(..., description="true verifies, false rejects")
    paid_amount: Optional[Decimal] = Field(
        None, ge=0, description="Amount actually received, if it differs from the price"
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RequestRentResponse)
async def request_rent(
    request: RequestRentRequest,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Request Rent

    Customer requests a published, unclaimed space. Creates the rent
    (status unpaid) and its ledger with the initial invoice.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: SPACE_NOT_FOUND
        - 409 Conflict: SPACE_ALREADY_CLAIMED, SPACE_NOT_PUBLISHED
    """
    use_case = RequestRentUseCase(uow, clock)
    result = await use_case.execute(actor, request.space_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{rent_id}/invoices/{invoice_id}/pay",
    status_code=status.HTTP_201_CREATED,
    response_model=PayInvoiceResponse,
)
async def pay_invoice(
    rent_id: UUID,
    invoice_id: str,
    proof: UploadFile = File(..., description="Proof of payment"),
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: ObjectStorage = Depends(get_object_storage),
    clock: Clock = Depends(get_clock),
):
    """
    Pay Invoice

    Customer uploads proof of payment for one ledger entry. Paying an
    entry again before it is verified replaces the previous proof.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: INSUFFICIENT_ROLE, NOT_RENT_OWNER
        - 404 Not Found: RENT_NOT_FOUND, INVOICE_ENTRY_NOT_FOUND
        - 412 Precondition Failed: RENT_NOT_PENDING
        - 422 Unprocessable Entity: INVOICE_NOT_YET_RELEASED, RENT_NOT_ACTIVE
        - 503 Service Unavailable: STORAGE_UNAVAILABLE
    """
    data = await proof.read()

    use_case = PayInvoiceUseCase(
        uow, storage, clock, storage_timeout=ApplicationConfig.STORAGE_TIMEOUT_SECONDS
    )
    result = await use_case.execute(
        actor, rent_id, invoice_id, data, proof.content_type or DEFAULT_CONTENT_TYPE
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{rent_id}/provision",
    status_code=status.HTTP_200_OK,
    response_model=ProvisionRentResponse,
)
async def provision_rent(
    rent_id: UUID,
    request: Optional[ProvisionRentRequest] = None,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Provision Rent

    Admin approves (or rejects) the initial payment of a pending rent.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: RENT_NOT_FOUND
        - 412 Precondition Failed: RENT_NOT_PENDING, PROOF_OF_PAYMENT_MISSING
    """
    request = request or ProvisionRentRequest()
    use_case = ProvisionRentUseCase(uow, clock)
    result = await use_case.execute(
        actor, rent_id, approve=request.approve, paid_amount=request.paid_amount
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{rent_id}/activate",
    status_code=status.HTTP_200_OK,
    response_model=ActivateRentResponse,
)
async def activate_rent(
    rent_id: UUID,
    contract_document: UploadFile = File(..., description="Signed contract (BAA)"),
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: ObjectStorage = Depends(get_object_storage),
    clock: Clock = Depends(get_clock),
):
    """
    Activate Rent

    Provider uploads the contract document; the monthly invoices are
    scheduled and the rent becomes active.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: INSUFFICIENT_ROLE, NOT_RENT_OWNER
        - 404 Not Found: RENT_NOT_FOUND
        - 412 Precondition Failed: RENT_NOT_PROVISIONED
        - 503 Service Unavailable: STORAGE_UNAVAILABLE
    """
    data = await contract_document.read()

    use_case = ActivateRentUseCase(
        uow,
        storage,
        clock,
        storage_timeout=ApplicationConfig.STORAGE_TIMEOUT_SECONDS,
        recurring_count=ApplicationConfig.RECURRING_INVOICE_COUNT,
    )
    result = await use_case.execute(
        actor, rent_id, data, contract_document.content_type or DEFAULT_CONTENT_TYPE
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{rent_id}/invoices/{invoice_id}/verify",
    status_code=status.HTTP_200_OK,
    response_model=VerifyInvoiceResponse,
)
async def verify_invoice(
    rent_id: UUID,
    invoice_id: str,
    request: VerifyInvoiceRequest,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Verify Invoice

    Admin verifies or rejects the payment of a monthly invoice.

    Raises:
        - 400 Bad Request: INITIAL_INVOICE_NOT_VERIFIABLE
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: RENT_NOT_FOUND, INVOICE_ENTRY_NOT_FOUND
        - 409 Conflict: INVOICE_ALREADY_VERIFIED
        - 422 Unprocessable Entity: RENT_NOT_ACTIVE
    """
    use_case = VerifyInvoiceUseCase(uow, clock)
    result = await use_case.execute(
        actor, rent_id, invoice_id, request.action, paid_amount=request.paid_amount
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=ListRentsResponse)
async def list_rents(
    pending: bool = Query(False, description="Only rents with a payment awaiting verification"),
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Rents

    Admins see every rent, providers their provider's rents, customers
    their own.
    """
    use_case = ListRentsUseCase(uow)
    result = await use_case.execute(actor, pending=pending)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{rent_id}", status_code=status.HTTP_200_OK, response_model=RentDetailResponse)
async def get_rent(
    rent_id: UUID,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Rent

    Returns the rent with its full invoice ledger.

    Raises:
        - 403 Forbidden: NOT_RENT_OWNER
        - 404 Not Found: RENT_NOT_FOUND
    """
    use_case = GetRentUseCase(uow)
    result = await use_case.execute(actor, rent_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{rent_id}/contract-document",
    status_code=status.HTTP_200_OK,
    response_model=ContractDocumentResponse,
)
async def get_contract_document(
    rent_id: UUID,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: ObjectStorage = Depends(get_object_storage),
):
    """
    Get Contract Document

    Returns a temporary URL for the rent's signed contract.

    Raises:
        - 403 Forbidden: NOT_RENT_OWNER
        - 404 Not Found: RENT_NOT_FOUND, CONTRACT_DOCUMENT_NOT_FOUND
        - 503 Service Unavailable: STORAGE_UNAVAILABLE
    """
    use_case = GetContractDocumentUseCase(
        uow, storage, storage_timeout=ApplicationConfig.STORAGE_TIMEOUT_SECONDS
    )
    result = await use_case.execute(actor, rent_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
