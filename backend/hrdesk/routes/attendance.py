from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hrdesk.config import settings
from hrdesk.core.dependencies import get_current_admin, get_current_user, list_scope, resolve_employee_scope
from hrdesk.core.validation import require_employee_exists
from hrdesk.database.session import get_db
from hrdesk.models.attendance import AttendanceStatus
from hrdesk.models.user import Employee
from hrdesk.schemas.attendance import (
    AttendanceBulkDeleteRequest,
    AttendanceDateDeleteRequest,
    AttendanceImportRequest,
    AttendanceUpdate,
    EditHistoryOut,
    EmployeeSummaryOut,
    PayCycleOut,
)
from hrdesk.services import attendance_service
from hrdesk.utils.pay_cycle import pay_cycle_by_offset, recent_pay_cycles

router = APIRouter()


def _window(cycle: Optional[int], start_date: Optional[date], end_date: Optional[date]):
    if cycle is None:
        return start_date, end_date
    window = pay_cycle_by_offset(cycle, start_day=settings.PAY_CYCLE_START_DAY)
    return window.start, window.end


# ---------------- RECORDS ----------------
@router.get("/records")
def list_records(
    employee_id: Optional[int] = None,
    status: Optional[AttendanceStatus] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    cycle: Optional[int] = Query(None, description="Pay cycle offset, 0 is the current cycle"),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500),
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    start_date, end_date = _window(cycle, start_date, end_date)
    data = attendance_service.list_records(
        db,
        employee_id=list_scope(current_user, employee_id),
        status=status,
        start_date=start_date,
        end_date=end_date,
        page=page,
        page_size=page_size,
    )
    return {"success": True, "data": data}


@router.post("/records")
def import_records(
    payload: AttendanceImportRequest,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    data = attendance_service.import_records(db, payload, admin)
    return {"success": True, "data": data}


@router.put("/records/{record_id}")
def update_record(
    record_id: int,
    payload: AttendanceUpdate,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    record = attendance_service.update_record(db, record_id, payload, admin)
    return {
        "success": True,
        "data": attendance_service.serialize_record(record),
        "message": "Attendance record updated successfully",
    }


@router.get("/records/{record_id}/history", response_model=List[EditHistoryOut])
def record_history(
    record_id: int,
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    record = attendance_service.get_record(db, record_id)
    resolve_employee_scope(current_user, record.employee_id)
    return attendance_service.get_edit_history(db, record_id)


@router.delete("/records/{record_id}")
def delete_record(
    record_id: int,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    attendance_service.delete_record(db, record_id, admin)
    return {"success": True, "message": "Record deleted"}


@router.post("/bulk-delete")
def bulk_delete(
    payload: AttendanceBulkDeleteRequest,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    deleted = attendance_service.bulk_delete_records(db, payload.ids, admin)
    return {"success": True, "data": {"deleted": deleted}}


@router.delete("/by-date")
def delete_by_date(
    payload: AttendanceDateDeleteRequest,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    deleted = attendance_service.delete_records_by_date(db, payload.date, admin, payload.employee_id)
    return {"success": True, "data": {"deleted": deleted}}


@router.get("/edited")
def edited_records(
    employee_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500),
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    data = attendance_service.list_records(
        db,
        employee_id=employee_id,
        start_date=start_date,
        end_date=end_date,
        edited_only=True,
        page=page,
        page_size=page_size,
    )
    return {"success": True, "data": data}


# ---------------- PAY CYCLES ----------------
@router.get("/pay-cycles", response_model=List[PayCycleOut])
def pay_cycles(
    employee_id: Optional[int] = None,
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return attendance_service.available_pay_cycles(
        db,
        settings.PAY_CYCLE_START_DAY,
        employee_id=list_scope(current_user, employee_id),
    )


@router.get("/pay-cycles/window", response_model=PayCycleOut)
def pay_cycle_window(
    offset: int = 0,
    current_user: Employee = Depends(get_current_user),
):
    cycle = pay_cycle_by_offset(offset, start_day=settings.PAY_CYCLE_START_DAY)
    return {"key": cycle.key, "start": cycle.start, "end": cycle.end, "label": cycle.label}


@router.get("/pay-cycles/recent", response_model=List[PayCycleOut])
def recent_cycles(
    count: int = Query(6, ge=1, le=24),
    current_user: Employee = Depends(get_current_user),
):
    return [
        {"key": c.key, "start": c.start, "end": c.end, "label": c.label}
        for c in recent_pay_cycles(count, start_day=settings.PAY_CYCLE_START_DAY)
    ]


@router.get("/dates-with-records")
def dates_with_records(
    employee_id: Optional[int] = None,
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    data = attendance_service.dates_with_records(db, list_scope(current_user, employee_id))
    return {"success": True, "data": data}


# ---------------- ANALYTICS ----------------
@router.get("/analytics")
def analytics(
    employee_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    cycle: Optional[int] = None,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    start_date, end_date = _window(cycle, start_date, end_date)
    data = attendance_service.attendance_analytics(
        db,
        start_date=start_date,
        end_date=end_date,
        employee_id=employee_id,
    )
    return {"success": True, "data": data}


@router.get("/me/summary", response_model=EmployeeSummaryOut)
def my_summary(
    cycle: int = 0,
    employee_id: Optional[int] = None,
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    target = resolve_employee_scope(current_user, employee_id)
    employee = current_user if target == current_user.id else require_employee_exists(db, target)
    window = pay_cycle_by_offset(cycle, start_day=settings.PAY_CYCLE_START_DAY)
    return attendance_service.employee_cycle_summary(db, employee, window, settings.DEFAULT_DAILY_HOURS)
