import secrets
import string
from datetime import datetime

from sqlalchemy.orm import Session
from fastapi import HTTPException

from hrdesk.core.logger import get_logger
from hrdesk.core.security import hash_password
from hrdesk.models.user import Employee
from hrdesk.schemas.user import EmployeeCreate, EmployeeUpdate

logger = get_logger("hrdesk.employees")

REQUIRED_EMPLOYEE_FIELDS = {"is_active"}


def generate_employee_code(count: int) -> str:
    year = datetime.now().year
    return f"EMP{year}{count+1:04d}"


def generate_temp_password(length: int = 10) -> str:
    chars = string.ascii_letters + string.digits + "@$#"
    return "".join(secrets.choice(chars) for _ in range(length))


def create_employee(db: Session, data: EmployeeCreate) -> tuple[Employee, str | None]:
    if data.email and db.query(Employee).filter(Employee.email == data.email).first():
        raise HTTPException(status_code=400, detail="Email already exists")

    employee_code = (data.employee_code or "").strip().upper() or generate_employee_code(db.query(Employee).count())
    if db.query(Employee).filter(Employee.employee_code == employee_code).first():
        raise HTTPException(status_code=400, detail="Employee code already exists")

    temp_password = None
    password = data.password
    if not password:
        temp_password = generate_temp_password()
        password = temp_password

    employee = Employee(
        employee_code=employee_code,
        name=data.name,
        email=data.email,
        password_hash=hash_password(password),
        role=data.role,
        department=data.department,
        designation=data.designation,
        daily_hours=data.daily_hours,
        is_active=True,
    )

    db.add(employee)
    db.commit()
    db.refresh(employee)
    logger.info(f"Created employee {employee.employee_code} ({employee.role})")

    return employee, temp_password


def list_employees(db: Session, include_inactive: bool = False, search: str | None = None) -> list[Employee]:
    q = db.query(Employee)
    if not include_inactive:
        q = q.filter(Employee.is_active == True)  # noqa: E712
    if search:
        pattern = f"%{search.strip()}%"
        q = q.filter(Employee.name.ilike(pattern) | Employee.employee_code.ilike(pattern))
    return q.order_by(Employee.employee_code.asc()).all()


def get_employee(db: Session, employee_id: int) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee


def update_employee(db: Session, employee_id: int, data: EmployeeUpdate) -> Employee:
    employee = get_employee(db, employee_id)
    changes = data.model_dump(exclude_unset=True)

    if changes.get("email") and changes["email"] != employee.email:
        if db.query(Employee).filter(Employee.email == changes["email"], Employee.id != employee_id).first():
            raise HTTPException(status_code=400, detail="Email already exists")

    for field, value in changes.items():
        if field == "name" and not value:
            raise HTTPException(status_code=400, detail="Name cannot be empty")
        if value is None and field in REQUIRED_EMPLOYEE_FIELDS:
            continue
        setattr(employee, field, value)

    db.commit()
    db.refresh(employee)
    logger.info(f"Updated employee {employee.employee_code}: {sorted(changes)}")
    return employee
