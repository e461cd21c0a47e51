from datetime import date, datetime, timezone
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from hrdesk.core.logger import get_logger
from hrdesk.core.validation import require_employee_exists
from hrdesk.models.penalty import Penalty
from hrdesk.models.user import Employee
from hrdesk.models.warning import EmployeeWarning, WarningSeverity
from hrdesk.schemas.warning import PenaltyCreate, PenaltyUpdate, WarningCreate, WarningUpdate

logger = get_logger("hrdesk.warnings")

REQUIRED_PENALTY_FIELDS = {"penalty_type", "description", "is_active"}


def _mark_viewed(item) -> None:
    if not item.viewed_by_employee:
        item.viewed_by_employee = True
        item.viewed_at = datetime.now(timezone.utc)


def _check_owner(item, current_user: Employee) -> None:
    if current_user.role != "admin" and item.employee_id != current_user.id:
        raise HTTPException(status_code=403, detail="Not allowed")


# -------- WARNINGS --------

def list_warnings(
    db: Session,
    *,
    employee_id: Optional[int] = None,
    severity: Optional[WarningSeverity] = None,
    active_only: bool = True,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[EmployeeWarning]:
    q = db.query(EmployeeWarning)
    if employee_id:
        q = q.filter(EmployeeWarning.employee_id == employee_id)
    if severity:
        q = q.filter(EmployeeWarning.severity == severity)
    if active_only:
        q = q.filter(EmployeeWarning.is_active == True)  # noqa: E712
    if start_date:
        q = q.filter(EmployeeWarning.related_date >= start_date)
    if end_date:
        q = q.filter(EmployeeWarning.related_date <= end_date)
    return q.order_by(EmployeeWarning.warning_date.desc(), EmployeeWarning.id.desc()).all()


def get_warning(db: Session, warning_id: int) -> EmployeeWarning:
    warning = db.query(EmployeeWarning).filter(EmployeeWarning.id == warning_id).first()
    if not warning:
        raise HTTPException(status_code=404, detail="Warning not found")
    return warning


def create_warning(db: Session, payload: WarningCreate, actor: Employee) -> EmployeeWarning:
    require_employee_exists(db, payload.employee_id)
    warning = EmployeeWarning(
        employee_id=payload.employee_id,
        warning_type=payload.warning_type,
        warning_message=payload.warning_message,
        severity=payload.severity,
        related_date=payload.related_date,
        issued_by=actor.id,
    )
    db.add(warning)
    db.commit()
    db.refresh(warning)
    logger.info(f"Warning {warning.id} ({warning.severity.value}) issued to employee {warning.employee_id} by {actor.employee_code}")
    return warning


def update_warning(db: Session, warning_id: int, payload: WarningUpdate, actor: Employee) -> EmployeeWarning:
    warning = get_warning(db, warning_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(warning, field, value)
    db.commit()
    db.refresh(warning)
    logger.info(f"Warning {warning.id} updated by {actor.employee_code}")
    return warning


def delete_warning(db: Session, warning_id: int, actor: Employee) -> None:
    warning = get_warning(db, warning_id)
    db.delete(warning)
    db.commit()
    logger.info(f"Warning {warning_id} deleted by {actor.employee_code}")


def mark_warning_read(db: Session, warning_id: int, current_user: Employee) -> EmployeeWarning:
    warning = get_warning(db, warning_id)
    _check_owner(warning, current_user)
    _mark_viewed(warning)
    db.commit()
    db.refresh(warning)
    return warning


def unviewed_warnings(db: Session, employee_id: int) -> list[EmployeeWarning]:
    return db.query(EmployeeWarning).filter(
        EmployeeWarning.employee_id == employee_id,
        EmployeeWarning.is_active == True,  # noqa: E712
        EmployeeWarning.viewed_by_employee == False,  # noqa: E712
    ).order_by(EmployeeWarning.warning_date.desc()).all()


# -------- PENALTIES --------

def list_penalties(
    db: Session,
    *,
    employee_id: Optional[int] = None,
    active_only: bool = True,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[Penalty]:
    q = db.query(Penalty)
    if employee_id:
        q = q.filter(Penalty.employee_id == employee_id)
    if active_only:
        q = q.filter(Penalty.is_active == True)  # noqa: E712
    if start_date:
        q = q.filter(Penalty.penalty_date >= start_date)
    if end_date:
        q = q.filter(Penalty.penalty_date <= end_date)
    return q.order_by(Penalty.penalty_date.desc(), Penalty.id.desc()).all()


def get_penalty(db: Session, penalty_id: int) -> Penalty:
    penalty = db.query(Penalty).filter(Penalty.id == penalty_id).first()
    if not penalty:
        raise HTTPException(status_code=404, detail="Penalty not found")
    return penalty


def create_penalty(db: Session, payload: PenaltyCreate, actor: Employee) -> Penalty:
    require_employee_exists(db, payload.employee_id)
    penalty = Penalty(
        employee_id=payload.employee_id,
        attendance_id=payload.attendance_id,
        penalty_type=payload.penalty_type,
        amount=payload.amount,
        description=payload.description,
        penalty_date=payload.penalty_date or date.today(),
        notes=payload.notes,
        issued_by=actor.id,
    )
    db.add(penalty)
    db.commit()
    db.refresh(penalty)
    logger.info(f"Penalty {penalty.id} issued to employee {penalty.employee_id} by {actor.employee_code}")
    return penalty


def update_penalty(db: Session, penalty_id: int, payload: PenaltyUpdate, actor: Employee) -> Penalty:
    penalty = get_penalty(db, penalty_id)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("amount") is not None and changes["amount"] < 0:
        raise HTTPException(status_code=400, detail="Amount cannot be negative")
    for field, value in changes.items():
        if value is None and field in REQUIRED_PENALTY_FIELDS:
            continue
        setattr(penalty, field, value)
    db.commit()
    db.refresh(penalty)
    logger.info(f"Penalty {penalty.id} updated by {actor.employee_code}")
    return penalty


def delete_penalty(db: Session, penalty_id: int, actor: Employee) -> None:
    penalty = get_penalty(db, penalty_id)
    db.delete(penalty)
    db.commit()
    logger.info(f"Penalty {penalty_id} deleted by {actor.employee_code}")


def mark_penalty_read(db: Session, penalty_id: int, current_user: Employee) -> Penalty:
    penalty = get_penalty(db, penalty_id)
    _check_owner(penalty, current_user)
    _mark_viewed(penalty)
    db.commit()
    db.refresh(penalty)
    return penalty


def unviewed_penalties(db: Session, employee_id: int) -> list[Penalty]:
    return db.query(Penalty).filter(
        Penalty.employee_id == employee_id,
        Penalty.is_active == True,  # noqa: E712
        Penalty.viewed_by_employee == False,  # noqa: E712
    ).order_by(Penalty.penalty_date.desc()).all()
