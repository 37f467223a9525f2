"""
Admin API Routes - Internal Billing Jobs

These endpoints are for schedulers and internal service integrations.
Authentication is via Admin API Key, not caller JWTs.
"""

from fastapi import APIRouter, Depends, status

from rent_service.api.error import raise_for_error
from rent_service.api.utils.admin_auth import verify_admin_api_key
from rent_service.app.services.clock import Clock
from rent_service.app.services.unit_of_work import UnitOfWork
from rent_service.app.use_cases.billing import (
    ScanOverdueInvoicesResponse,
    ScanOverdueInvoicesUseCase,
)
from rent_service.depends import get_clock, get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/billing/scan-overdue",
    status_code=status.HTTP_200_OK,
    response_model=ScanOverdueInvoicesResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def scan_overdue_invoices(
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Scan Overdue Invoices

    Flags released monthly invoices of active rents that are still unpaid
    or rejected. Safe to call repeatedly: each invoice is flagged once.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    use_case = ScanOverdueInvoicesUseCase(uow, clock)
    result = await use_case.execute()

    if result.is_err():
        raise_for_error(result.error)

    return result.value
