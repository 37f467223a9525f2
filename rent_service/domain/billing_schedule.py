"""
Recurring billing schedule.

Computes the release dates and identifiers of the monthly invoices a
contract gets when it is activated. Pure: no I/O, no clock.
"""

import calendar
from datetime import datetime
from typing import List

from pydantic import BaseModel

DEFAULT_RECURRING_COUNT = 11


class ScheduledInvoice(BaseModel):
    invoice_id: str
    release_date: datetime


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the epoch, reading a naive datetime as UTC."""
    return calendar.timegm(moment.utctimetuple()) * 1000 + moment.microsecond // 1000


def schedule_recurring_invoices(
    activation_date: datetime, count: int = DEFAULT_RECURRING_COUNT
) -> List[ScheduledInvoice]:
    """
    Schedule `count` monthly invoices following `activation_date`.

    Entry i falls i months after activation, on the activation day clamped
    to the last day of the target month (Jan 31 -> Feb 28/29). Release
    dates are midnight of that day.
    """
    if count < 0:
        raise ValueError("count must be non-negative")

    schedule = []
    for i in range(1, count + 1):
        # 0-based month arithmetic so the year rolls over on division
        month_index = (activation_date.month - 1) + i
        year = activation_date.year + month_index // 12
        month = month_index % 12 + 1

        last_day = calendar.monthrange(year, month)[1]
        day = min(activation_date.day, last_day)
        release_date = datetime(year, month, day)

        invoice_id = f"rnt-{year:04d}{month:02d}-{epoch_millis(release_date)}"
        schedule.append(ScheduledInvoice(invoice_id=invoice_id, release_date=release_date))

    return schedule


def initial_invoice_id(requested_at: datetime) -> str:
    """Identifier of the request/deposit entry at position 0."""
    return f"req-{requested_at.year}-{requested_at.month}-{epoch_millis(requested_at)}"
