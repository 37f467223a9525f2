"""
Unit tests for the recurring billing schedule

Pure date arithmetic, no mocks needed.
"""

import calendar
from datetime import date, datetime, timedelta

import pytest

from rent_service.domain.billing_schedule import (
    epoch_millis,
    initial_invoice_id,
    schedule_recurring_invoices,
)


def test_schedule_has_eleven_entries_by_default():
    """Test activation produces eleven monthly invoices"""
    schedule = schedule_recurring_invoices(datetime(2024, 5, 10, 14, 45))

    assert len(schedule) == 11
    assert schedule[0].release_date == datetime(2024, 6, 10)
    assert schedule[-1].release_date == datetime(2025, 4, 10)


def test_schedule_clamps_day_to_month_end():
    """Test Jan 31 activation clamps to the last day of shorter months"""
    schedule = schedule_recurring_invoices(datetime(2024, 1, 31))

    days = [entry.release_date.day for entry in schedule]
    months = [entry.release_date.month for entry in schedule]

    assert days == [29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
    assert months == [2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12]


def test_schedule_non_leap_february():
    """Test Jan 31 in a non-leap year clamps February to the 28th"""
    schedule = schedule_recurring_invoices(datetime(2023, 1, 31))

    assert schedule[0].release_date == datetime(2023, 2, 28)
    # The clamp does not drift: March is back on the 31st
    assert schedule[1].release_date == datetime(2023, 3, 31)


def test_schedule_rolls_over_year_from_december():
    """Test December activation starts the schedule in January of the next year"""
    schedule = schedule_recurring_invoices(datetime(2024, 12, 15))

    assert schedule[0].release_date == datetime(2025, 1, 15)
    assert schedule[10].release_date == datetime(2025, 11, 15)
    assert all(entry.release_date.year == 2025 for entry in schedule)


def test_schedule_release_dates_are_midnight():
    """Test release dates carry no time of day"""
    schedule = schedule_recurring_invoices(datetime(2024, 7, 4, 23, 59, 59))

    for entry in schedule:
        assert entry.release_date.time() == datetime.min.time()


def test_schedule_invoice_id_format():
    """Test invoice ids encode year, zero-padded month and epoch millis"""
    schedule = schedule_recurring_invoices(datetime(2024, 1, 31))

    first = schedule[0]
    expected_millis = calendar.timegm(datetime(2024, 2, 29).timetuple()) * 1000
    assert first.invoice_id == f"rnt-202402-{expected_millis}"
    assert len({entry.invoice_id for entry in schedule}) == 11


def test_schedule_custom_count():
    """Test count overrides the default number of invoices"""
    assert len(schedule_recurring_invoices(datetime(2024, 3, 1), 3)) == 3
    assert schedule_recurring_invoices(datetime(2024, 3, 1), 0) == []


def test_schedule_rejects_negative_count():
    """Test negative counts are rejected"""
    with pytest.raises(ValueError):
        schedule_recurring_invoices(datetime(2024, 3, 1), -1)


def test_schedule_holds_for_every_activation_day():
    """Test every activation day of 2023-2025 yields a valid increasing schedule"""
    day = date(2023, 1, 1)
    while day <= date(2025, 12, 31):
        activation = datetime(day.year, day.month, day.day, 9, 30)
        schedule = schedule_recurring_invoices(activation)

        assert len(schedule) == 11
        previous = activation
        for offset, entry in enumerate(schedule, start=1):
            release = entry.release_date
            assert release > previous
            last_day = calendar.monthrange(release.year, release.month)[1]
            assert release.day == min(activation.day, last_day)
            assert (release.year * 12 + release.month) - (
                activation.year * 12 + activation.month
            ) == offset
            previous = release

        day += timedelta(days=1)


def test_epoch_millis_reads_naive_as_utc():
    """Test epoch millis of a naive timestamp, including sub-second part"""
    assert epoch_millis(datetime(1970, 1, 1)) == 0
    assert epoch_millis(datetime(1970, 1, 1, 0, 0, 1, 250000)) == 1250


def test_initial_invoice_id_format():
    """Test initial invoice id uses unpadded year-month"""
    requested_at = datetime(2024, 3, 5, 8, 0)

    assert initial_invoice_id(requested_at) == f"req-2024-3-{epoch_millis(requested_at)}"
