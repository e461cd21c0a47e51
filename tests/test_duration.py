from datetime import datetime, timezone

from hrdesk.utils.duration import calculate_total_hours, calculate_total_minutes, calculate_worked_hours


def test_standard_day_with_lunch_break():
    assert calculate_total_hours("09:00", "13:00", "13:30", "18:00", "00:00") == "08:30"


def test_equal_check_in_and_out_is_zero():
    assert calculate_total_hours("09:00", None, None, "09:00") == "00:00"


def test_overnight_shift_yields_zero():
    assert calculate_total_hours("22:00", None, None, "06:00") == "00:00"


def test_missing_check_in_or_out_is_zero():
    assert calculate_total_hours(None, "13:00", "13:30", "18:00") == "00:00"
    assert calculate_total_hours("09:00", "13:00", "13:30", "") == "00:00"
    assert calculate_total_hours("bad", None, None, "18:00") == "00:00"


def test_break_order_does_not_matter():
    forward = calculate_total_hours("09:00", "13:00", "13:30", "18:00")
    reverse = calculate_total_hours("09:00", "13:30", "13:00", "18:00")
    assert forward == reverse == "08:30"


def test_half_open_or_malformed_break_is_ignored():
    assert calculate_total_hours("09:00", "13:00", None, "18:00") == "09:00"
    assert calculate_total_hours("09:00", "13:00", "later", "18:00") == "09:00"


def test_overtime_is_added():
    assert calculate_total_hours("09:00", "13:00", "13:30", "18:00", "01:15") == "09:45"
    assert calculate_total_hours("09:00", None, None, "18:00", "junk") == "09:00"


def test_total_is_never_negative():
    assert calculate_total_minutes("09:00", "08:00", "12:00", "10:00") == 0
    assert calculate_total_hours("09:00", "08:00", "12:00", "10:00") == "00:00"


def test_calculate_worked_hours_from_timestamps():
    day = datetime(2025, 3, 10, tzinfo=timezone.utc)
    worked = calculate_worked_hours(
        day.replace(hour=9),
        day.replace(hour=13),
        day.replace(hour=13, minute=30),
        day.replace(hour=18),
    )
    assert worked == 8.5


def test_calculate_worked_hours_with_overtime_and_gaps():
    day = datetime(2025, 3, 10)
    assert calculate_worked_hours(day.replace(hour=9), None, None, day.replace(hour=17), overtime_hours=1.5) == 9.5
    assert calculate_worked_hours(None, None, None, day.replace(hour=17)) == 0.0
