from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Iterable, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from hrdesk.models.user import Employee


def require_non_empty_list(values: Iterable[Any] | None, detail: str) -> list[Any]:
    normalized = list(values or [])
    if not normalized:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )
    return normalized


def require_employee_exists(db: Session, employee_id: int, detail: str = "Employee not found") -> Employee:
    employee = db.query(Employee).filter(
        Employee.id == employee_id,
        Employee.is_active == True,  # noqa: E712
    ).first()
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )
    return employee


def parse_time_on_date(target_date: date, value: Optional[str]) -> Optional[datetime]:
    """Accepts HH:MM, HH:MM:SS or an ISO datetime; the result is a UTC wall-clock timestamp."""
    if not value:
        return None
    raw = str(value).strip()
    if not raw or raw in {"null", "undefined", "Invalid Date"}:
        return None

    if "T" in raw:
        try:
            parsed_dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError as exc:
            raise HTTPException(status_code=400, detail="Invalid time format. Use HH:MM, HH:MM:SS or ISO datetime") from exc
        if parsed_dt.tzinfo is None:
            parsed_dt = parsed_dt.replace(tzinfo=timezone.utc)
        return parsed_dt.astimezone(timezone.utc)

    try:
        parts = raw.split(":")
        hour = int(parts[0])
        minute = int(parts[1])
        second = int(parts[2]) if len(parts) > 2 else 0
        return datetime.combine(target_date, time(hour, minute, second), tzinfo=timezone.utc)
    except (ValueError, IndexError) as exc:
        raise HTTPException(status_code=400, detail="Invalid time format. Use HH:MM, HH:MM:SS or ISO datetime") from exc


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
