from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hrdesk.core.dependencies import get_current_user
from hrdesk.core.logger import get_logger
from hrdesk.core.security import create_access_token, verify_password
from hrdesk.database.session import get_db
from hrdesk.models.user import Employee
from hrdesk.schemas.user import EmployeeOut, LoginRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = get_logger("hrdesk.auth")


def _build_auth_response(user: Employee):
    token_payload = {
        "sub": str(user.id),
        "role": user.role,
    }
    return {
        "access_token": create_access_token(token_payload),
        "token_type": "bearer",
        "user": {
            "id": user.id,
            "name": user.name,
            "role": user.role
        }
    }


@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    login_id = (data.employee_code or "").strip()

    # Admins may also sign in with their email address.
    if "@" in login_id:
        user = db.query(Employee).filter(
            Employee.email == login_id.lower(),
            Employee.role == "admin"
        ).first()
    else:
        user = db.query(Employee).filter(Employee.employee_code == login_id.upper()).first()

    if not user or not verify_password(data.password, user.password_hash):
        logger.warning(f"Failed login attempt for {login_id!r}")
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account is inactive")

    logger.info(f"{user.employee_code} signed in")
    return _build_auth_response(user)


@router.get("/me", response_model=EmployeeOut)
def me(current_user: Employee = Depends(get_current_user)):
    return current_user
