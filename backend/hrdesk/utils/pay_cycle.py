"""
Salary cycle windows.

A cycle runs from ``start_day`` of month M to the day before ``start_day``
of month M+1, both inclusive. With the default start day of 6 that is the
6th of one month through the 5th of the next.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from hrdesk.utils.timeconv import config_value_to_minutes, minutes_to_hours

DEFAULT_START_DAY = 6


@dataclass(frozen=True)
class PayCycle:
    start: date
    end: date

    @property
    def key(self) -> str:
        return self.start.isoformat()

    @property
    def label(self) -> str:
        return format_pay_cycle_period(self.start, self.end)

    def contains(self, value: date | datetime) -> bool:
        return is_date_in_pay_cycle(value, self.start, self.end)


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def _shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def _cycle_starting(year: int, month: int, start_day: int) -> PayCycle:
    start = date(year, month, start_day)
    next_year, next_month = _shift_month(year, month, 1)
    end = date(next_year, next_month, start_day) - timedelta(days=1)
    return PayCycle(start=start, end=end)


def pay_cycle_for_date(value: date | datetime, start_day: int = DEFAULT_START_DAY) -> PayCycle:
    day = _as_date(value)
    year, month = day.year, day.month
    if day.day < start_day:
        year, month = _shift_month(year, month, -1)
    return _cycle_starting(year, month, start_day)


def current_pay_cycle(today: date | datetime | None = None, start_day: int = DEFAULT_START_DAY) -> PayCycle:
    return pay_cycle_for_date(today or date.today(), start_day)


def pay_cycle_by_offset(
    offset: int,
    today: date | datetime | None = None,
    start_day: int = DEFAULT_START_DAY,
) -> PayCycle:
    # Shift the anchor month, not the reference day, so short months never
    # skip a cycle.
    anchor = current_pay_cycle(today, start_day).start
    year, month = _shift_month(anchor.year, anchor.month, offset)
    return _cycle_starting(year, month, start_day)


def format_pay_cycle_period(start: date | datetime, end: date | datetime) -> str:
    start, end = _as_date(start), _as_date(end)
    start_label = f"{start.day} {start:%b}"
    if start.year != end.year:
        start_label += f" {start.year}"
    return f"{start_label} – {end.day} {end:%b} {end.year}"


def is_date_in_pay_cycle(value: date | datetime, start: date | datetime, end: date | datetime) -> bool:
    return _as_date(start) <= _as_date(value) <= _as_date(end)


def pay_cycle_dates(start: date, end: date) -> list[str]:
    days = []
    current = start
    while current <= end:
        days.append(current.isoformat())
        current += timedelta(days=1)
    return days


def working_days(cycle: PayCycle) -> int:
    # Sundays are the only non-working day.
    return sum(1 for day in pay_cycle_dates(cycle.start, cycle.end) if date.fromisoformat(day).weekday() != 6)


def hours_goal(cycle: PayCycle, daily_hours: float) -> float:
    return minutes_to_hours(working_days(cycle) * config_value_to_minutes(daily_hours))


def recent_pay_cycles(
    count: int,
    today: date | datetime | None = None,
    start_day: int = DEFAULT_START_DAY,
) -> list[PayCycle]:
    return [pay_cycle_by_offset(-i, today, start_day) for i in range(count)]
