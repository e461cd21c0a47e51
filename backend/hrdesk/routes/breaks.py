from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from hrdesk.config import settings
from hrdesk.core.dependencies import get_current_admin, get_current_user, resolve_employee_scope
from hrdesk.core.validation import require_employee_exists
from hrdesk.database.session import get_db
from hrdesk.models.break_session import BreakSession
from hrdesk.models.user import Employee
from hrdesk.schemas.breaks import BreakDeleteRequest, BreakTargetRequest, BreakUpdate, ManualBreakCreate
from hrdesk.services import break_service
from hrdesk.utils.export import CSV_MEDIA_TYPE, content_disposition

router = APIRouter(prefix="/breaks", tags=["Breaks"])
admin_router = APIRouter(prefix="/admin/breaks", tags=["Admin Breaks"])


def _out(item: BreakSession) -> dict:
    return break_service.serialize_break(
        item,
        settings.BREAK_COMPLIANT_MIN_MINUTES,
        settings.BREAK_COMPLIANT_MAX_MINUTES,
    )


def _target_employee(db: Session, current_user: Employee, payload: Optional[BreakTargetRequest]) -> Employee:
    target = resolve_employee_scope(current_user, payload.employee_id if payload else None)
    return current_user if target == current_user.id else require_employee_exists(db, target)


# ---------------- EMPLOYEE ----------------
@router.post("/start")
def start_break(
    payload: Optional[BreakTargetRequest] = None,
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    item = break_service.start_break(db, _target_employee(db, current_user, payload))
    return {"success": True, "data": _out(item), "message": "Break started"}


@router.post("/end")
def end_break(
    payload: Optional[BreakTargetRequest] = None,
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    item = break_service.end_break(db, _target_employee(db, current_user, payload))
    return {"success": True, "data": _out(item), "message": "Break ended"}


@router.get("/active")
def active_break(
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    item = break_service.get_active_break(db, current_user.id)
    return {"success": True, "data": _out(item) if item else None}


@router.get("/history")
def break_history(
    employee_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    target = resolve_employee_scope(current_user, employee_id)
    data = break_service.break_history(
        db,
        target,
        settings.BREAK_COMPLIANT_MIN_MINUTES,
        settings.BREAK_COMPLIANT_MAX_MINUTES,
        start_date=start_date,
        end_date=end_date,
    )
    return {"success": True, "data": data}


@router.get("/deleted")
def my_deleted_breaks(
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    items = break_service.query_breaks(db, employee_id=current_user.id, deleted=True).order_by(
        BreakSession.deleted_at.desc()
    ).all()
    return {"success": True, "data": [_out(i) for i in items]}


# ---------------- ADMIN ----------------
@admin_router.get("")
def list_breaks(
    employee_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    active_only: bool = False,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    q = break_service.query_breaks(db, employee_id=employee_id, start_date=start_date, end_date=end_date)
    if active_only:
        q = q.filter(BreakSession.is_active == True)  # noqa: E712
    items = q.order_by(BreakSession.break_date.desc(), BreakSession.break_in_time.desc()).all()
    return {"success": True, "data": [_out(i) for i in items]}


@admin_router.post("/manual")
def create_manual_break(
    payload: ManualBreakCreate,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    item = break_service.create_manual_break(db, payload, admin)
    return {"success": True, "data": _out(item), "message": "Break added"}


@admin_router.get("/deleted")
def deleted_breaks(
    employee_id: Optional[int] = None,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    items = break_service.query_breaks(db, employee_id=employee_id, deleted=True).order_by(
        BreakSession.deleted_at.desc()
    ).all()
    return {"success": True, "data": [_out(i) for i in items]}


@admin_router.get("/export")
def export_breaks(
    start_date: date,
    end_date: date,
    employee_id: Optional[int] = Query(None),
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    content, filename = break_service.export_breaks_csv(db, start_date, end_date, employee_id)
    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": content_disposition(filename)},
    )


@admin_router.put("/{break_id}")
def update_break(
    break_id: int,
    payload: BreakUpdate,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    item = break_service.update_break(db, break_id, payload, admin)
    return {"success": True, "data": _out(item), "message": "Break updated"}


@admin_router.delete("/{break_id}")
def delete_break(
    break_id: int,
    payload: BreakDeleteRequest,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    item = break_service.delete_break(db, break_id, payload.reason, admin)
    return {"success": True, "data": _out(item), "message": "Break deleted"}
