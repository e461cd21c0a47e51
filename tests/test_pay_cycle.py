from datetime import date, datetime, timedelta

import pytest

from hrdesk.utils.pay_cycle import (
    PayCycle,
    current_pay_cycle,
    format_pay_cycle_period,
    hours_goal,
    is_date_in_pay_cycle,
    pay_cycle_by_offset,
    pay_cycle_dates,
    pay_cycle_for_date,
    recent_pay_cycles,
    working_days,
)


def test_current_cycle_on_or_after_start_day():
    cycle = current_pay_cycle(date(2025, 3, 10))
    assert cycle == PayCycle(start=date(2025, 3, 6), end=date(2025, 4, 5))


def test_current_cycle_before_start_day():
    cycle = current_pay_cycle(date(2025, 3, 3))
    assert cycle == PayCycle(start=date(2025, 2, 6), end=date(2025, 3, 5))


def test_cycle_boundaries_are_inclusive():
    assert pay_cycle_for_date(date(2025, 3, 6)).start == date(2025, 3, 6)
    assert pay_cycle_for_date(date(2025, 3, 5)).end == date(2025, 3, 5)


def test_cycle_across_year_end():
    cycle = current_pay_cycle(datetime(2025, 1, 3, 14, 30))
    assert cycle.start == date(2024, 12, 6)
    assert cycle.end == date(2025, 1, 5)
    assert cycle.label == "6 Dec 2024 – 5 Jan 2025"


def test_offsets():
    today = date(2025, 3, 10)
    assert pay_cycle_by_offset(0, today).start == date(2025, 3, 6)
    assert pay_cycle_by_offset(-1, today).start == date(2025, 2, 6)
    assert pay_cycle_by_offset(1, today).end == date(2025, 5, 5)
    assert pay_cycle_by_offset(-3, today).start == date(2024, 12, 6)


@pytest.mark.parametrize("today", [date(2025, 1, 31), date(2024, 2, 29), date(2025, 3, 5), date(2025, 12, 6)])
def test_offsets_are_contiguous(today):
    for offset in range(-30, 30):
        current = pay_cycle_by_offset(offset, today)
        following = pay_cycle_by_offset(offset + 1, today)
        assert following.start == current.end + timedelta(days=1)
        assert current.start <= current.end


def test_month_end_reference_does_not_skip_cycles():
    # 31 Jan shifted by one month must land on the Feb cycle, not March.
    assert pay_cycle_by_offset(1, date(2025, 1, 31)).start == date(2025, 2, 6)


def test_custom_start_day():
    cycle = current_pay_cycle(date(2025, 3, 10), start_day=1)
    assert cycle == PayCycle(start=date(2025, 3, 1), end=date(2025, 3, 31))


def test_format_pay_cycle_period():
    assert format_pay_cycle_period(date(2025, 1, 6), date(2025, 2, 5)) == "6 Jan – 5 Feb 2025"


def test_is_date_in_pay_cycle():
    start, end = date(2025, 3, 6), date(2025, 4, 5)
    assert is_date_in_pay_cycle(date(2025, 3, 6), start, end)
    assert is_date_in_pay_cycle(datetime(2025, 4, 5, 23, 59), start, end)
    assert not is_date_in_pay_cycle(date(2025, 4, 6), start, end)
    assert PayCycle(start, end).contains(date(2025, 3, 20))


def test_pay_cycle_dates():
    days = pay_cycle_dates(date(2025, 3, 6), date(2025, 4, 5))
    assert len(days) == 31
    assert days[0] == "2025-03-06"
    assert days[-1] == "2025-04-05"


def test_working_days_and_goal():
    cycle = pay_cycle_for_date(date(2025, 3, 10))
    # Sundays 9, 16, 23 and 30 March fall in the window.
    assert working_days(cycle) == 27
    assert hours_goal(cycle, 8.20) == 225.0


def test_recent_pay_cycles_newest_first():
    cycles = recent_pay_cycles(3, date(2025, 3, 10))
    assert [c.key for c in cycles] == ["2025-03-06", "2025-02-06", "2025-01-06"]
