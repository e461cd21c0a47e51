import math
from datetime import date, datetime, timezone
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload

from hrdesk.core.logger import get_logger
from hrdesk.core.validation import as_utc, parse_time_on_date
from hrdesk.models.break_session import BreakSession
from hrdesk.models.user import Employee
from hrdesk.schemas.breaks import BreakOut, BreakUpdate, ManualBreakCreate
from hrdesk.utils.export import (
    build_csv,
    format_break_duration,
    format_export_date,
    format_export_time,
    safe_filename_part,
)
from hrdesk.utils.filters import average
from hrdesk.utils.timeconv import format_minutes_label

logger = get_logger("hrdesk.breaks")

EXPORT_HEADERS = ["Date", "Employee Code", "Employee Name", "Break In", "Break Out", "Duration (Formatted)"]


def _elapsed_minutes(start: datetime, end: datetime) -> float:
    return (as_utc(end) - as_utc(start)).total_seconds() / 60


def duration_minutes(start: datetime, end: datetime) -> int:
    # Whole minutes, partial minutes dropped.
    return max(math.floor(_elapsed_minutes(start, end)), 0)


def is_compliant(duration: Optional[int], min_minutes: int, max_minutes: int) -> Optional[bool]:
    if duration is None:
        return None
    return min_minutes <= duration <= max_minutes


def serialize_break(item: BreakSession, min_minutes: int, max_minutes: int) -> dict:
    employee = item.employee
    return BreakOut(**{
        "id": item.id,
        "employee_id": item.employee_id,
        "employee_code": employee.employee_code if employee else None,
        "employee_name": employee.name if employee else None,
        "break_date": item.break_date,
        "start_time": item.break_in_time,
        "end_time": item.break_out_time,
        "duration": item.break_duration,
        "duration_display": format_minutes_label(item.break_duration) if item.break_duration is not None else "-",
        "status": item.status,
        "is_compliant": is_compliant(item.break_duration, min_minutes, max_minutes),
        "edit_reason": item.edit_reason,
        "is_deleted": bool(item.is_deleted),
        "delete_reason": item.delete_reason,
        "deleted_at": item.deleted_at,
    }).model_dump()


def query_breaks(
    db: Session,
    *,
    employee_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    deleted: bool = False,
):
    q = db.query(BreakSession).options(joinedload(BreakSession.employee)).filter(
        BreakSession.is_deleted == deleted
    )
    if employee_id:
        q = q.filter(BreakSession.employee_id == employee_id)
    if start_date:
        q = q.filter(BreakSession.break_date >= start_date)
    if end_date:
        q = q.filter(BreakSession.break_date <= end_date)
    return q


def get_active_break(db: Session, employee_id: int) -> Optional[BreakSession]:
    return db.query(BreakSession).filter(
        BreakSession.employee_id == employee_id,
        BreakSession.is_active == True,  # noqa: E712
        BreakSession.is_deleted == False,  # noqa: E712
    ).first()


def get_break(db: Session, break_id: int) -> BreakSession:
    item = db.query(BreakSession).filter(
        BreakSession.id == break_id,
        BreakSession.is_deleted == False,  # noqa: E712
    ).first()
    if not item:
        raise HTTPException(status_code=404, detail="Break not found")
    return item


# ---------------- EMPLOYEE ----------------

def start_break(db: Session, employee: Employee) -> BreakSession:
    if get_active_break(db, employee.id):
        raise HTTPException(status_code=400, detail="You already have an active break session")

    now = datetime.now(timezone.utc)
    item = BreakSession(
        employee_id=employee.id,
        break_date=now.date(),
        break_in_time=now,
        is_active=True,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info(f"Break {item.id} started by {employee.employee_code}")
    return item


def end_break(db: Session, employee: Employee, now: Optional[datetime] = None) -> BreakSession:
    item = get_active_break(db, employee.id)
    if not item:
        raise HTTPException(status_code=400, detail="No active break session found")

    now = now or datetime.now(timezone.utc)
    item.break_out_time = now
    item.break_duration = duration_minutes(item.break_in_time, now)
    item.is_active = False
    db.commit()
    db.refresh(item)
    logger.info(f"Break {item.id} ended by {employee.employee_code} after {item.break_duration} minutes")
    return item


def break_history(
    db: Session,
    employee_id: int,
    min_minutes: int,
    max_minutes: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> dict:
    items = query_breaks(db, employee_id=employee_id, start_date=start_date, end_date=end_date).order_by(
        BreakSession.break_in_time.desc()
    ).all()
    completed = [i for i in items if not i.is_active and i.break_duration is not None]
    total_minutes = sum(i.break_duration for i in completed)
    compliant = sum(1 for i in completed if is_compliant(i.break_duration, min_minutes, max_minutes))
    return {
        "breaks": [serialize_break(i, min_minutes, max_minutes) for i in items],
        "stats": {
            "total_breaks": len(completed),
            "total_minutes": total_minutes,
            "total_display": format_break_duration(total_minutes),
            "average_minutes": round(average(total_minutes, len(completed)), 1),
            "compliant_breaks": compliant,
            "non_compliant_breaks": len(completed) - compliant,
        },
    }


# ---------------- ADMIN ----------------

def _check_overlap(db: Session, employee_id: int, start: datetime, end: datetime, exclude_id: Optional[int] = None):
    q = db.query(BreakSession).filter(
        BreakSession.employee_id == employee_id,
        BreakSession.is_deleted == False,  # noqa: E712
        BreakSession.break_in_time != None,  # noqa: E711
    )
    if exclude_id:
        q = q.filter(BreakSession.id != exclude_id)
    for other in q.all():
        other_start = as_utc(other.break_in_time)
        other_end = as_utc(other.break_out_time) if other.break_out_time else datetime.now(timezone.utc)
        if start < other_end and end > other_start:
            raise HTTPException(status_code=400, detail="Break overlaps with an existing break session")


def create_manual_break(db: Session, payload: ManualBreakCreate, actor: Employee) -> BreakSession:
    employee = db.query(Employee).filter(Employee.id == payload.employee_id).first()
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")

    start = parse_time_on_date(payload.break_date, payload.start_time)
    end = parse_time_on_date(payload.break_date, payload.end_time)
    if not start or not end:
        raise HTTPException(status_code=400, detail="Both start and end times are required")
    if end <= start:
        raise HTTPException(status_code=400, detail="Break end time must be after start time")

    _check_overlap(db, employee.id, start, end)

    item = BreakSession(
        employee_id=employee.id,
        break_date=payload.break_date,
        break_in_time=start,
        break_out_time=end,
        break_duration=duration_minutes(start, end),
        is_active=False,
        edit_reason=payload.reason,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info(f"Manual break {item.id} added for {employee.employee_code} by {actor.employee_code}")
    return item


def update_break(db: Session, break_id: int, payload: BreakUpdate, actor: Employee) -> BreakSession:
    item = get_break(db, break_id)

    start = parse_time_on_date(item.break_date, payload.start_time) or as_utc(item.break_in_time)
    end = parse_time_on_date(item.break_date, payload.end_time) or as_utc(item.break_out_time)

    if start == as_utc(item.break_in_time) and end == as_utc(item.break_out_time):
        raise HTTPException(status_code=400, detail="No changes detected")
    if not start or not end:
        raise HTTPException(status_code=400, detail="Both start and end times are required")
    if end <= start:
        raise HTTPException(status_code=400, detail="Break end time must be after start time")

    _check_overlap(db, item.employee_id, start, end, exclude_id=item.id)

    item.break_in_time = start
    item.break_out_time = end
    item.break_duration = duration_minutes(start, end)
    item.is_active = False
    item.edit_reason = payload.reason
    db.commit()
    db.refresh(item)
    logger.info(f"Break {item.id} edited by {actor.employee_code}: {item.break_duration} minutes")
    return item


def delete_break(db: Session, break_id: int, reason: str, actor: Employee) -> BreakSession:
    item = get_break(db, break_id)
    item.is_deleted = True
    item.is_active = False
    item.deleted_at = datetime.now(timezone.utc)
    item.deleted_by = actor.id
    item.delete_reason = reason
    db.commit()
    db.refresh(item)
    logger.info(f"Break {item.id} deleted by {actor.employee_code}")
    return item


def export_breaks_csv(
    db: Session,
    start_date: date,
    end_date: date,
    employee_id: Optional[int] = None,
) -> tuple[bytes, str]:
    items = query_breaks(db, employee_id=employee_id, start_date=start_date, end_date=end_date).order_by(
        BreakSession.break_date.asc(), BreakSession.break_in_time.asc()
    ).all()

    rows = []
    for item in items:
        employee = item.employee
        rows.append([
            format_export_date(item.break_date),
            employee.employee_code if employee else "-",
            employee.name if employee else "-",
            format_export_time(item.break_in_time),
            format_export_time(item.break_out_time),
            format_break_duration(item.break_duration),
        ])

    period = f"{start_date.isoformat()}_to_{end_date.isoformat()}"
    if employee_id:
        employee = db.query(Employee).filter(Employee.id == employee_id).first()
        if not employee:
            raise HTTPException(status_code=404, detail="Employee not found")
        filename = f"breaks_{safe_filename_part(employee.employee_code)}_{safe_filename_part(employee.name)}_{period}.csv"
    else:
        filename = f"breaks_all_employees_{period}.csv"

    logger.info(f"Exported {len(rows)} breaks to {filename}")
    return build_csv(EXPORT_HEADERS, rows), filename
