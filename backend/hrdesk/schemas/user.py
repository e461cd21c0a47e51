from pydantic import BaseModel, EmailStr, field_validator
from datetime import datetime
from typing import Optional, Literal


def _validate_daily_hours(value: Optional[float]) -> Optional[float]:
    if value is None:
        return value
    minutes_part = round((value - int(value)) * 100)
    if value <= 0 or value >= 24 or minutes_part >= 60:
        raise ValueError("Daily hours must be in H.MM format, e.g. 8.20")
    return value


class LoginRequest(BaseModel):
    employee_code: str
    password: str


class UserInfo(BaseModel):
    id: int
    name: str
    role: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str
    user: UserInfo


class EmployeeCreate(BaseModel):
    employee_code: Optional[str] = None
    name: str
    email: Optional[EmailStr] = None
    role: Literal["admin", "employee"] = "employee"
    department: Optional[str] = None
    designation: Optional[str] = None
    daily_hours: Optional[float] = None
    password: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Name is required")
        return cleaned

    @field_validator("daily_hours")
    @classmethod
    def validate_daily_hours(cls, value: Optional[float]):
        return _validate_daily_hours(value)


class EmployeeUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    daily_hours: Optional[float] = None
    is_active: Optional[bool] = None

    @field_validator("name", "department", "designation", mode="before")
    @classmethod
    def normalize_optional_strings(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("daily_hours")
    @classmethod
    def validate_daily_hours(cls, value: Optional[float]):
        return _validate_daily_hours(value)


class EmployeeOut(BaseModel):
    id: int
    employee_code: str
    name: str
    email: Optional[EmailStr] = None
    role: str
    department: Optional[str] = None
    designation: Optional[str] = None
    daily_hours: Optional[float] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
