from hrdesk.utils.timeconv import (
    clock_to_decimal_hours,
    clock_to_minutes,
    config_value_to_minutes,
    decimal_hours_to_clock,
    format_hours_short,
    format_minutes_label,
    hours_to_minutes,
    minutes_to_clock,
    minutes_to_hours,
)


def test_decimal_hours_to_clock():
    assert decimal_hours_to_clock(8.5) == "08:30"
    assert decimal_hours_to_clock(0.25) == "00:15"
    assert decimal_hours_to_clock(0) == "00:00"
    assert decimal_hours_to_clock(None) == "00:00"


def test_decimal_hours_to_clock_does_not_pad_large_totals():
    assert decimal_hours_to_clock(125.25) == "125:15"
    assert decimal_hours_to_clock(99.5) == "99:30"


def test_decimal_hours_to_clock_keeps_sixty_minute_rounding():
    # 7.999h is 7h 59.94m; the minutes round up without carrying.
    assert decimal_hours_to_clock(7.999) == "07:60"


def test_clock_to_decimal_hours():
    assert clock_to_decimal_hours("08:30") == 8.5
    assert clock_to_decimal_hours("01:15:00") == 1.25
    assert clock_to_decimal_hours("") == 0.0
    assert clock_to_decimal_hours(None) == 0.0
    assert clock_to_decimal_hours("8") == 0.0
    assert clock_to_decimal_hours("aa:bb") == 0.0


def test_clock_to_minutes_requires_two_parts():
    assert clock_to_minutes("08:30") == 510
    assert clock_to_minutes("00:00") == 0
    assert clock_to_minutes("08:30:00") is None
    assert clock_to_minutes("x:30") is None
    assert clock_to_minutes(None) is None


def test_minutes_to_clock():
    assert minutes_to_clock(510) == "08:30"
    assert minutes_to_clock(0) == "00:00"
    assert minutes_to_clock(-15) == "00:00"
    assert minutes_to_clock(6015) == "100:15"


def test_clock_round_trip_is_stable():
    for minutes in range(0, 24 * 60, 7):
        assert hours_to_minutes(clock_to_decimal_hours(minutes_to_clock(minutes))) == minutes


def test_clock_to_decimal_and_back_for_every_minute_of_day():
    for minutes in range(1, 24 * 60):
        clock = minutes_to_clock(minutes)
        assert decimal_hours_to_clock(clock_to_decimal_hours(clock)) == clock


def test_hours_minutes_conversion():
    assert hours_to_minutes(8.5) == 510
    assert hours_to_minutes(None) == 0
    assert minutes_to_hours(90) == 1.5


def test_config_value_to_minutes_reads_hours_and_minutes():
    assert config_value_to_minutes(8.20) == 500
    assert config_value_to_minutes(8.0) == 480
    assert config_value_to_minutes(7.45) == 465
    assert config_value_to_minutes(None) == 0


def test_display_labels():
    assert format_hours_short(8.5) == "8h 30m"
    assert format_hours_short(0) == "0h 0m"
    assert format_minutes_label(45) == "45m"
    assert format_minutes_label(65) == "1h 5m"
    assert format_minutes_label(60) == "1h"
