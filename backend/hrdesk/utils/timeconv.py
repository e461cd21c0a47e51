import math


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _pad_hours(hours: int) -> str:
    # Multi-month totals (>= 100h) are printed as-is.
    return str(hours) if hours >= 100 else f"{hours:02d}"


def decimal_hours_to_clock(value: float | None) -> str:
    """8.5 -> "08:30". Minutes can round up to "60" for values just below the hour."""
    if not value:
        return "00:00"
    hours = math.floor(value)
    minutes = _round_half_up((value - hours) * 60)
    return f"{_pad_hours(hours)}:{minutes:02d}"


def clock_to_minutes(text: str | None) -> int | None:
    if not text:
        return None
    parts = str(text).strip().split(":")
    if len(parts) != 2:
        return None
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return None
    return hours * 60 + minutes


def clock_to_decimal_hours(text: str | None) -> float:
    if not text:
        return 0.0
    parts = str(text).strip().split(":")
    if len(parts) < 2:
        return 0.0
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return 0.0
    return hours + minutes / 60


def minutes_to_clock(minutes: int | None) -> str:
    total = max(int(minutes or 0), 0)
    return f"{_pad_hours(total // 60)}:{total % 60:02d}"


def hours_to_minutes(hours: float | None) -> int:
    return _round_half_up(float(hours or 0) * 60)


def minutes_to_hours(minutes: float | None) -> float:
    return float(minutes or 0) / 60


def config_value_to_minutes(config_value: float | None) -> int:
    """Daily-hours settings are stored as H.MM: 8.20 is 8 hours 20 minutes (500)."""
    value = float(config_value or 0)
    whole = math.floor(value)
    return whole * 60 + _round_half_up((value - whole) * 100)


def format_hours_short(hours: float | None) -> str:
    value = float(hours or 0)
    whole = math.floor(value)
    minutes = math.floor((value - whole) * 60)
    return f"{whole}h {minutes}m"


def format_minutes_label(minutes: int | None) -> str:
    total = int(minutes or 0)
    if total < 60:
        return f"{total}m"
    hours, rest = divmod(total, 60)
    return f"{hours}h {rest}m" if rest else f"{hours}h"
