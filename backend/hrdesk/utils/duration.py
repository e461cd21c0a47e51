from datetime import datetime

from hrdesk.utils.timeconv import clock_to_minutes, minutes_to_clock


def calculate_total_minutes(
    check_in: str | None,
    break_in: str | None,
    break_out: str | None,
    check_out: str | None,
    overtime: str | None = None,
) -> int:
    """
    Net worked minutes for a single calendar day.

    Check-out must be later than check-in (no overnight shifts). The break
    window is subtracted as an absolute difference so either entry order
    works. Malformed values are ignored instead of raising.
    """
    start = clock_to_minutes(check_in)
    end = clock_to_minutes(check_out)
    if start is None or end is None:
        return 0
    if end <= start:
        return 0

    total = end - start

    if break_in and break_out:
        break_start = clock_to_minutes(break_in)
        break_end = clock_to_minutes(break_out)
        if break_start is not None and break_end is not None:
            total -= abs(break_end - break_start)

    if overtime and overtime != "00:00":
        extra = clock_to_minutes(overtime)
        if extra is not None:
            total += extra

    return max(total, 0)


def calculate_total_hours(
    check_in: str | None,
    break_in: str | None,
    break_out: str | None,
    check_out: str | None,
    overtime: str | None = None,
) -> str:
    return minutes_to_clock(calculate_total_minutes(check_in, break_in, break_out, check_out, overtime))


def clock_of(value: datetime | None) -> str | None:
    # Stored timestamps carry UTC wall-clock semantics.
    if value is None:
        return None
    return value.strftime("%H:%M")


def calculate_worked_hours(
    check_in: datetime | None,
    break_in: datetime | None,
    break_out: datetime | None,
    check_out: datetime | None,
    overtime_hours: float = 0,
) -> float:
    overtime_minutes = round(float(overtime_hours or 0) * 60)
    overtime = minutes_to_clock(overtime_minutes) if overtime_minutes > 0 else None
    minutes = calculate_total_minutes(
        clock_of(check_in),
        clock_of(break_in),
        clock_of(break_out),
        clock_of(check_out),
        overtime,
    )
    return round(minutes / 60, 2)
