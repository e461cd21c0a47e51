from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hrdesk.core.dependencies import get_current_admin, get_current_user, list_scope
from hrdesk.database.session import get_db
from hrdesk.models.user import Employee
from hrdesk.models.warning import WarningSeverity
from hrdesk.schemas.warning import (
    PenaltyCreate,
    PenaltyOut,
    PenaltyUpdate,
    WarningCreate,
    WarningOut,
    WarningUpdate,
)
from hrdesk.services import warning_service

router = APIRouter(prefix="/warnings", tags=["Warnings"])
penalty_router = APIRouter(prefix="/penalties", tags=["Penalties"])


def _warning(item) -> dict:
    return WarningOut.model_validate(item).model_dump()


def _penalty(item) -> dict:
    return PenaltyOut.model_validate(item).model_dump()


# ---------------- WARNINGS ----------------
@router.get("")
def list_warnings(
    employee_id: Optional[int] = None,
    severity: Optional[WarningSeverity] = None,
    active_only: bool = True,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    items = warning_service.list_warnings(
        db,
        employee_id=list_scope(current_user, employee_id),
        severity=severity,
        active_only=active_only,
        start_date=start_date,
        end_date=end_date,
    )
    return {"success": True, "data": [_warning(i) for i in items]}


@router.get("/unviewed")
def unviewed_warnings(
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    items = warning_service.unviewed_warnings(db, current_user.id)
    return {"success": True, "data": [_warning(i) for i in items]}


@router.post("")
def create_warning(
    payload: WarningCreate,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    item = warning_service.create_warning(db, payload, admin)
    return {"success": True, "data": _warning(item)}


@router.put("/{warning_id}")
def update_warning(
    warning_id: int,
    payload: WarningUpdate,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    item = warning_service.update_warning(db, warning_id, payload, admin)
    return {"success": True, "data": _warning(item)}


@router.delete("/{warning_id}")
def delete_warning(
    warning_id: int,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    warning_service.delete_warning(db, warning_id, admin)
    return {"success": True, "message": "Warning deleted"}


@router.post("/{warning_id}/mark-read")
def mark_warning_read(
    warning_id: int,
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    item = warning_service.mark_warning_read(db, warning_id, current_user)
    return {"success": True, "data": _warning(item)}


# ---------------- PENALTIES ----------------
@penalty_router.get("")
def list_penalties(
    employee_id: Optional[int] = None,
    active_only: bool = True,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    items = warning_service.list_penalties(
        db,
        employee_id=list_scope(current_user, employee_id),
        active_only=active_only,
        start_date=start_date,
        end_date=end_date,
    )
    return {"success": True, "data": [_penalty(i) for i in items]}


@penalty_router.get("/unviewed")
def unviewed_penalties(
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    items = warning_service.unviewed_penalties(db, current_user.id)
    return {"success": True, "data": [_penalty(i) for i in items]}


@penalty_router.post("")
def create_penalty(
    payload: PenaltyCreate,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    item = warning_service.create_penalty(db, payload, admin)
    return {"success": True, "data": _penalty(item)}


@penalty_router.put("/{penalty_id}")
def update_penalty(
    penalty_id: int,
    payload: PenaltyUpdate,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    item = warning_service.update_penalty(db, penalty_id, payload, admin)
    return {"success": True, "data": _penalty(item)}


@penalty_router.delete("/{penalty_id}")
def delete_penalty(
    penalty_id: int,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    warning_service.delete_penalty(db, penalty_id, admin)
    return {"success": True, "message": "Penalty deleted"}


@penalty_router.post("/{penalty_id}/mark-read")
def mark_penalty_read(
    penalty_id: int,
    current_user: Employee = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    item = warning_service.mark_penalty_read(db, penalty_id, current_user)
    return {"success": True, "data": _penalty(item)}
