from datetime import date, datetime, timezone
from typing import Optional
from uuid import uuid4

from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload

from hrdesk.core.logger import get_logger
from hrdesk.core.validation import as_utc, parse_time_on_date, require_non_empty_list
from hrdesk.models.attendance import AttendanceRecord, AttendanceStatus
from hrdesk.models.attendance_edit_history import AttendanceEditHistory
from hrdesk.models.user import Employee
from hrdesk.schemas.attendance import AttendanceImportRequest, AttendanceRecordOut, AttendanceUpdate
from hrdesk.utils.duration import calculate_worked_hours
from hrdesk.utils.filters import average, count_by_status, percentage, sum_hours
from hrdesk.utils.pay_cycle import PayCycle, hours_goal, pay_cycle_for_date, working_days
from hrdesk.utils.timeconv import (
    clock_to_decimal_hours,
    decimal_hours_to_clock,
    format_hours_short,
    format_minutes_label,
    hours_to_minutes,
    minutes_to_hours,
)

logger = get_logger("hrdesk.attendance")

PRESENT_STATUSES = {AttendanceStatus.PRESENT, AttendanceStatus.WFH_APPROVED}
RECALC_FIELDS = ("check_in_time", "check_out_time", "break_in_time", "break_out_time", "overtime")
TRACKED_FIELDS = (
    "status",
    "shift",
    "check_in_time",
    "check_out_time",
    "break_in_time",
    "break_out_time",
    "total_hours",
    "overtime",
)


# ─── SERIALIZATION ────────────────────────────────────────────────────────────

def break_minutes(record: AttendanceRecord) -> int:
    if not record.break_in_time or not record.break_out_time:
        return 0
    return abs(round((as_utc(record.break_out_time) - as_utc(record.break_in_time)).total_seconds() / 60))


def serialize_record(record: AttendanceRecord) -> dict:
    employee = record.employee
    minutes = break_minutes(record)
    return AttendanceRecordOut(**{
        "id": record.id,
        "employee_id": record.employee_id,
        "employee_code": employee.employee_code if employee else str(record.employee_id),
        "employee_name": employee.name if employee else f"Employee {record.employee_id}",
        "department": employee.department if employee else None,
        "date": record.date,
        "status": record.status,
        "shift": record.shift,
        "check_in_time": record.check_in_time,
        "check_out_time": record.check_out_time,
        "break_in_time": record.break_in_time,
        "break_out_time": record.break_out_time,
        "total_hours": float(record.total_hours or 0),
        "total_hours_display": decimal_hours_to_clock(record.total_hours),
        "overtime": float(record.overtime or 0),
        "overtime_display": decimal_hours_to_clock(record.overtime),
        "break_display": format_minutes_label(minutes) if minutes > 0 else "-",
        "has_been_edited": bool(record.has_been_edited),
        "edit_reason": record.edit_reason,
        "edited_at": record.edited_at,
        "import_source": record.import_source,
    }).model_dump()


def format_history_value(value) -> str:
    if value is None or value == "":
        return "Not set"
    if isinstance(value, AttendanceStatus):
        return value.value
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, float):
        return str(round(value, 2))
    return str(value)


def _snapshot(record: AttendanceRecord) -> dict:
    return {field: getattr(record, field) for field in TRACKED_FIELDS}


def append_edit_history(
    db: Session,
    *,
    record: AttendanceRecord,
    before: dict,
    actor: Employee,
    reason: str,
) -> list[AttendanceEditHistory]:
    entries = []
    for field in TRACKED_FIELDS:
        old_value = format_history_value(before.get(field))
        new_value = format_history_value(getattr(record, field))
        if old_value == new_value:
            continue
        entry = AttendanceEditHistory(
            attendance_id=record.id,
            edited_by=actor.id,
            edited_by_name=actor.name,
            edited_by_role=(actor.role or "").upper(),
            field_changed=field,
            old_value=old_value,
            new_value=new_value,
            change_reason=reason,
        )
        db.add(entry)
        entries.append(entry)
    return entries


# ─── QUERIES ──────────────────────────────────────────────────────────────────

def query_records(
    db: Session,
    *,
    employee_id: Optional[int] = None,
    status: Optional[AttendanceStatus] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    edited_only: bool = False,
):
    q = db.query(AttendanceRecord).options(joinedload(AttendanceRecord.employee))
    if employee_id:
        q = q.filter(AttendanceRecord.employee_id == employee_id)
    if status:
        q = q.filter(AttendanceRecord.status == status)
    if start_date:
        q = q.filter(AttendanceRecord.date >= start_date)
    if end_date:
        q = q.filter(AttendanceRecord.date <= end_date)
    if edited_only:
        q = q.filter(AttendanceRecord.has_been_edited == True)  # noqa: E712
    return q


def list_records(
    db: Session,
    *,
    employee_id: Optional[int] = None,
    status: Optional[AttendanceStatus] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    edited_only: bool = False,
    page: int = 1,
    page_size: int = 50,
) -> dict:
    q = query_records(
        db,
        employee_id=employee_id,
        status=status,
        start_date=start_date,
        end_date=end_date,
        edited_only=edited_only,
    )
    total = q.count()
    order = AttendanceRecord.edited_at.desc() if edited_only else AttendanceRecord.date.desc()
    rows = q.order_by(order, AttendanceRecord.id.desc()).offset((page - 1) * page_size).limit(page_size).all()
    return {
        "records": [serialize_record(r) for r in rows],
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": (total + page_size - 1) // page_size if total else 0,
    }


def get_record(db: Session, record_id: int) -> AttendanceRecord:
    record = db.query(AttendanceRecord).filter(AttendanceRecord.id == record_id).first()
    if not record:
        raise HTTPException(status_code=404, detail="Record not found")
    return record


def get_edit_history(db: Session, record_id: int) -> list[AttendanceEditHistory]:
    get_record(db, record_id)
    return db.query(AttendanceEditHistory).filter(
        AttendanceEditHistory.attendance_id == record_id
    ).order_by(AttendanceEditHistory.created_at.desc(), AttendanceEditHistory.id.desc()).all()


def dates_with_records(db: Session, employee_id: Optional[int] = None) -> list[dict]:
    q = db.query(AttendanceRecord.date)
    if employee_id:
        q = q.filter(AttendanceRecord.employee_id == employee_id)
    counts: dict[date, int] = {}
    for (day,) in q.all():
        counts[day] = counts.get(day, 0) + 1
    return [{"date": day.isoformat(), "count": counts[day]} for day in sorted(counts, reverse=True)]


def available_pay_cycles(db: Session, start_day: int, employee_id: Optional[int] = None) -> list[dict]:
    q = db.query(AttendanceRecord.date)
    if employee_id:
        q = q.filter(AttendanceRecord.employee_id == employee_id)

    cycles: dict[date, tuple[PayCycle, int]] = {}
    for (day,) in q.all():
        cycle = pay_cycle_for_date(day, start_day)
        _, count = cycles.get(cycle.start, (cycle, 0))
        cycles[cycle.start] = (cycle, count + 1)

    return [
        {
            "key": cycle.key,
            "start": cycle.start,
            "end": cycle.end,
            "label": cycle.label,
            "record_count": count,
        }
        for cycle, count in sorted(cycles.values(), key=lambda item: item[0].start, reverse=True)
    ]


# ─── MUTATIONS ────────────────────────────────────────────────────────────────

def import_records(db: Session, payload: AttendanceImportRequest, actor: Employee) -> dict:
    batch = f"batch_{uuid4().hex[:12]}"
    employee_ids = {row.employee_id for row in payload.records}
    known = {e.id for e in db.query(Employee.id).filter(Employee.id.in_(employee_ids)).all()}

    created = 0
    updated = 0
    skipped = []
    pending: dict[tuple[int, date], AttendanceRecord] = {}
    for row in payload.records:
        if row.employee_id not in known:
            skipped.append({"employee_id": row.employee_id, "date": row.date.isoformat(), "error": "Employee not found"})
            continue

        check_in = parse_time_on_date(row.date, row.check_in_time)
        check_out = parse_time_on_date(row.date, row.check_out_time)
        break_in = parse_time_on_date(row.date, row.break_in_time)
        break_out = parse_time_on_date(row.date, row.break_out_time)
        total_hours = row.total_hours
        if total_hours is None:
            total_hours = calculate_worked_hours(check_in, break_in, break_out, check_out)

        key = (row.employee_id, row.date)
        record = pending.get(key) or db.query(AttendanceRecord).filter(
            AttendanceRecord.employee_id == row.employee_id,
            AttendanceRecord.date == row.date,
        ).first()
        if record and record.has_been_edited:
            skipped.append({"employee_id": row.employee_id, "date": row.date.isoformat(), "error": "Record was edited manually"})
            continue
        if record:
            updated += 1
        else:
            record = AttendanceRecord(employee_id=row.employee_id, date=row.date)
            db.add(record)
            created += 1
        pending[key] = record

        record.status = row.status
        record.check_in_time = check_in
        record.check_out_time = check_out
        record.break_in_time = break_in
        record.break_out_time = break_out
        record.total_hours = round(float(total_hours or 0), 2)
        record.overtime = record.overtime or 0
        record.shift = row.shift
        record.import_source = payload.import_source
        record.import_batch = batch

    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(f"Attendance import {batch} failed")
        raise

    logger.info(
        f"Attendance import {batch} by {actor.employee_code}: "
        f"{created} created, {updated} updated, {len(skipped)} skipped"
    )
    return {"batch": batch, "created": created, "updated": updated, "skipped": skipped}


def update_record(db: Session, record_id: int, payload: AttendanceUpdate, actor: Employee) -> AttendanceRecord:
    record = get_record(db, record_id)
    before = _snapshot(record)
    changes = payload.model_dump(exclude_unset=True, exclude={"edit_reason"})

    if changes.get("status") is not None:
        record.status = changes["status"]
    if "shift" in changes:
        record.shift = changes["shift"]
    for field in ("check_in_time", "check_out_time", "break_in_time", "break_out_time"):
        if field in changes:
            setattr(record, field, parse_time_on_date(record.date, changes[field]))

    if record.check_in_time and record.check_out_time and as_utc(record.check_out_time) <= as_utc(record.check_in_time):
        raise HTTPException(status_code=400, detail="Check-out must be later than check-in")

    if "overtime" in changes:
        record.overtime = round(clock_to_decimal_hours(changes["overtime"]), 2)

    times_changed = any(field in changes for field in RECALC_FIELDS)
    if changes.get("total_hours"):
        record.total_hours = round(clock_to_decimal_hours(changes["total_hours"]), 2)
    elif times_changed or (record.check_in_time and record.check_out_time):
        record.total_hours = calculate_worked_hours(
            record.check_in_time,
            record.break_in_time,
            record.break_out_time,
            record.check_out_time,
            record.overtime or 0,
        )

    entries = append_edit_history(db, record=record, before=before, actor=actor, reason=payload.edit_reason)
    if not entries:
        db.rollback()
        raise HTTPException(status_code=400, detail="No changes detected")

    record.has_been_edited = True
    record.edit_reason = payload.edit_reason
    record.edited_at = datetime.now(timezone.utc)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(record)
    logger.info(
        f"Attendance record {record.id} edited by {actor.employee_code}: "
        f"{', '.join(e.field_changed for e in entries)}"
    )
    return record


def delete_record(db: Session, record_id: int, actor: Employee) -> None:
    record = get_record(db, record_id)
    db.delete(record)
    db.commit()
    logger.info(f"Attendance record {record_id} deleted by {actor.employee_code}")


def bulk_delete_records(db: Session, ids: list[int], actor: Employee) -> int:
    ids = require_non_empty_list(ids, "ids is required")
    records = db.query(AttendanceRecord).filter(AttendanceRecord.id.in_(ids)).all()
    for record in records:
        db.delete(record)
    db.commit()
    logger.info(f"{len(records)} attendance records deleted by {actor.employee_code}")
    return len(records)


def delete_records_by_date(db: Session, target_date: date, actor: Employee, employee_id: Optional[int] = None) -> int:
    q = db.query(AttendanceRecord).filter(AttendanceRecord.date == target_date)
    if employee_id:
        q = q.filter(AttendanceRecord.employee_id == employee_id)
    records = q.all()
    if not records:
        raise HTTPException(status_code=404, detail="No records found for this date")
    for record in records:
        db.delete(record)
    db.commit()
    logger.info(f"{len(records)} attendance records for {target_date} deleted by {actor.employee_code}")
    return len(records)


# ─── ANALYTICS ────────────────────────────────────────────────────────────────

def _original_total_hours(record: AttendanceRecord) -> float:
    if record.has_been_edited:
        for entry in record.edit_history:
            if entry.field_changed == "total_hours":
                try:
                    return float(entry.old_value)
                except (TypeError, ValueError):
                    return 0.0
    return float(record.total_hours or 0)


def employee_cycle_summary(
    db: Session,
    employee: Employee,
    cycle: PayCycle,
    default_daily_hours: float,
) -> dict:
    records = query_records(db, employee_id=employee.id, start_date=cycle.start, end_date=cycle.end).all()

    current_minutes = 0
    original_minutes = 0
    days_with_hours = 0
    present = 0
    absent = 0
    for record in records:
        if record.status in PRESENT_STATUSES:
            present += 1
        elif record.status == AttendanceStatus.ABSENT:
            absent += 1
        if (record.total_hours or 0) > 0:
            current_minutes += hours_to_minutes(record.total_hours)
            days_with_hours += 1
        original_minutes += hours_to_minutes(_original_total_hours(record))

    current_hours = minutes_to_hours(current_minutes)
    original_hours = minutes_to_hours(original_minutes)
    adjusted = current_hours - original_hours
    goal = hours_goal(cycle, employee.daily_hours or default_daily_hours)
    remaining = max(goal - current_hours, 0)

    return {
        "cycle": {
            "key": cycle.key,
            "start": cycle.start,
            "end": cycle.end,
            "label": cycle.label,
            "record_count": len(records),
        },
        "total_records": len(records),
        "present": present,
        "absent": absent,
        "current_total_hours": decimal_hours_to_clock(current_hours),
        "current_total_hours_short": format_hours_short(current_hours),
        "original_total_hours": decimal_hours_to_clock(original_hours),
        "hours_adjusted": f"{'-' if adjusted < 0 else '+'}{decimal_hours_to_clock(abs(adjusted))}",
        "average_work_hours": decimal_hours_to_clock(average(current_hours, days_with_hours)),
        "working_days": working_days(cycle),
        "hours_goal": decimal_hours_to_clock(goal),
        "hours_remaining": decimal_hours_to_clock(remaining),
        "goal_met": remaining <= 0,
        "status_counts": count_by_status(records, key=lambda r: r.status.value),
    }


def attendance_analytics(
    db: Session,
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    employee_id: Optional[int] = None,
) -> dict:
    records = query_records(db, employee_id=employee_id, start_date=start_date, end_date=end_date).all()

    by_employee: dict[int, list[AttendanceRecord]] = {}
    for record in records:
        by_employee.setdefault(record.employee_id, []).append(record)

    employees = []
    for emp_id, rows in by_employee.items():
        employee = rows[0].employee
        total = sum_hours(rows)
        with_hours = [r for r in rows if (r.total_hours or 0) > 0]
        present = sum(1 for r in rows if r.status in PRESENT_STATUSES)
        employees.append({
            "employee_id": emp_id,
            "employee_code": employee.employee_code if employee else str(emp_id),
            "employee_name": employee.name if employee else f"Employee {emp_id}",
            "department": employee.department if employee else None,
            "total_records": len(rows),
            "present_days": present,
            "absent_days": sum(1 for r in rows if r.status == AttendanceStatus.ABSENT),
            "late_days": sum(1 for r in rows if r.status == AttendanceStatus.LATE),
            "total_hours": round(total, 2),
            "total_hours_display": decimal_hours_to_clock(total),
            "average_hours_per_day": decimal_hours_to_clock(average(total, len(with_hours))),
            "overtime_hours": decimal_hours_to_clock(sum_hours(rows, key=lambda r: r.overtime)),
            "attendance_rate": percentage(present, len(rows)),
        })
    employees.sort(key=lambda item: item["total_hours"], reverse=True)

    total_hours = sum_hours(records)
    present_records = sum(1 for r in records if r.status in PRESENT_STATUSES)
    return {
        "summary": {
            "total_records": len(records),
            "total_employees": len(by_employee),
            "total_hours": round(total_hours, 2),
            "total_hours_display": decimal_hours_to_clock(total_hours),
            "present_records": present_records,
            "absent_records": sum(1 for r in records if r.status == AttendanceStatus.ABSENT),
            "attendance_rate": percentage(present_records, len(records)),
            "status_counts": count_by_status(records, key=lambda r: r.status.value),
        },
        "employees": employees,
    }
