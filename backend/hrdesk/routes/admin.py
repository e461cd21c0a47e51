from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hrdesk.core.dependencies import get_current_admin
from hrdesk.database.session import get_db
from hrdesk.models.user import Employee
from hrdesk.schemas.user import EmployeeCreate, EmployeeOut, EmployeeUpdate
from hrdesk.services import employee_service

router = APIRouter(prefix="/admin", tags=["Admin"])


# ================= EMPLOYEES =================
@router.post("/employees")
def create_employee(
    payload: EmployeeCreate,
    db: Session = Depends(get_db),
    admin: Employee = Depends(get_current_admin)
):
    employee, temp_password = employee_service.create_employee(db, payload)
    data = EmployeeOut.model_validate(employee).model_dump()
    if temp_password:
        data["temp_password"] = temp_password
    return {"success": True, "data": data}


@router.get("/employees", response_model=List[EmployeeOut])
def get_employees(
    include_inactive: bool = False,
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin: Employee = Depends(get_current_admin)
):
    return employee_service.list_employees(db, include_inactive=include_inactive, search=search)


@router.get("/employees/{employee_id}", response_model=EmployeeOut)
def get_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    admin: Employee = Depends(get_current_admin)
):
    return employee_service.get_employee(db, employee_id)


@router.put("/employees/{employee_id}", response_model=EmployeeOut)
def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    db: Session = Depends(get_db),
    admin: Employee = Depends(get_current_admin)
):
    return employee_service.update_employee(db, employee_id, payload)
