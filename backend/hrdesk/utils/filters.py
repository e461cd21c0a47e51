from collections import Counter
from datetime import date, datetime, time
from typing import Any, Callable, Iterable


def _lower_bound(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _upper_bound(value: date | datetime) -> datetime:
    # The end day counts through 23:59:59.999999.
    day = value.date() if isinstance(value, datetime) else value
    upper = datetime.combine(day, time.max)
    if isinstance(value, datetime) and value.tzinfo is not None:
        upper = upper.replace(tzinfo=value.tzinfo)
    return upper


def _align(point: datetime, bound: datetime) -> tuple[datetime, datetime]:
    if point.tzinfo is None and bound.tzinfo is not None:
        return point.replace(tzinfo=bound.tzinfo), bound
    if point.tzinfo is not None and bound.tzinfo is None:
        return point, bound.replace(tzinfo=point.tzinfo)
    return point, bound


def in_range(value: date | datetime | None, start: date | datetime | None, end: date | datetime | None) -> bool:
    """Open-ended on either side when the bound is None."""
    if value is None:
        return False
    if start is not None:
        point, lower = _align(_lower_bound(value), _lower_bound(start))
        if point < lower:
            return False
    if end is not None:
        point, upper = _align(_lower_bound(value), _upper_bound(end))
        if point > upper:
            return False
    return True


def filter_by_range(
    items: Iterable[Any],
    start: date | datetime | None,
    end: date | datetime | None,
    key: Callable[[Any], date | datetime | None],
) -> list[Any]:
    return [item for item in items if in_range(key(item), start, end)]


def count_by_status(items: Iterable[Any], key: Callable[[Any], str] = lambda item: item.status) -> dict[str, int]:
    return dict(Counter(str(key(item)) for item in items))


def sum_hours(items: Iterable[Any], key: Callable[[Any], float | None] = lambda item: item.total_hours) -> float:
    return sum(float(key(item) or 0) for item in items)


def average(total: float, count: int) -> float:
    return total / count if count else 0.0


def percentage(part: float, total: float, digits: int = 1) -> float:
    if not total:
        return 0.0
    return round(part / total * 100, digits)
