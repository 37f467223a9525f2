"""
Periodic overdue-invoice scan.

Runs ScanOverdueInvoicesUseCase on a fixed interval inside the API
process. Each entry is flagged at most once, enforced by a unique index
on overdue audit events, so overlapping scans only report it again.
"""

import asyncio
import logging
from typing import Callable

from sqlmodel.ext.asyncio.session import AsyncSession

from rent_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from rent_service.app.services.clock import Clock
from rent_service.app.use_cases.billing import (
    ScanOverdueInvoicesResponse,
    ScanOverdueInvoicesUseCase,
)
from rent_service.libs.result import Result

logger = logging.getLogger(__name__)


async def scan_once(
    session_factory: Callable[[], AsyncSession], clock: Clock
) -> Result[ScanOverdueInvoicesResponse]:
    async with session_factory() as session:
        use_case = ScanOverdueInvoicesUseCase(SqlAlchemyUnitOfWork(session), clock)
        return await use_case.execute()


async def run_overdue_scanner(
    session_factory: Callable[[], AsyncSession],
    clock: Clock,
    interval_seconds: float,
) -> None:
    """Scan forever; a failed scan is logged and retried on the next tick."""
    logger.info(f"Overdue scanner started (every {interval_seconds}s)")
    while True:
        try:
            result = await scan_once(session_factory, clock)
            if result.is_err():
                logger.error(f"Overdue scan failed: {result.error.code}")
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Overdue scan crashed")
        await asyncio.sleep(interval_seconds)
