from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Optional

from hrdesk.models.warning import WarningSeverity


def _require_text(value: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("This field is required")
    return cleaned


# -------- WARNINGS --------
class WarningCreate(BaseModel):
    employee_id: int
    warning_type: str
    warning_message: str
    severity: WarningSeverity = WarningSeverity.LOW
    related_date: Optional[date] = None

    @field_validator("warning_type", "warning_message")
    @classmethod
    def validate_non_empty(cls, value: str):
        return _require_text(value)


class WarningUpdate(BaseModel):
    warning_type: Optional[str] = None
    warning_message: Optional[str] = None
    severity: Optional[WarningSeverity] = None
    is_active: Optional[bool] = None

    @field_validator("warning_type", "warning_message")
    @classmethod
    def validate_optional_non_empty(cls, value: Optional[str]):
        if value is None:
            return value
        return _require_text(value)


class WarningOut(BaseModel):
    id: int
    employee_id: int
    warning_type: str
    warning_message: str
    severity: WarningSeverity
    warning_date: datetime
    related_date: Optional[date] = None
    issued_by: Optional[int] = None
    is_active: bool
    viewed_by_employee: bool
    viewed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# -------- PENALTIES --------
class PenaltyCreate(BaseModel):
    employee_id: int
    attendance_id: Optional[int] = None
    penalty_type: str
    amount: Optional[float] = None
    description: str
    penalty_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("penalty_type", "description")
    @classmethod
    def validate_non_empty(cls, value: str):
        return _require_text(value)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, value: Optional[float]):
        if value is not None and value < 0:
            raise ValueError("Amount cannot be negative")
        return value


class PenaltyUpdate(BaseModel):
    penalty_type: Optional[str] = None
    amount: Optional[float] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("penalty_type", "description")
    @classmethod
    def validate_optional_non_empty(cls, value: Optional[str]):
        if value is None:
            return value
        return _require_text(value)


class PenaltyOut(BaseModel):
    id: int
    employee_id: int
    attendance_id: Optional[int] = None
    penalty_type: str
    amount: Optional[float] = None
    description: str
    penalty_date: date
    issued_by: Optional[int] = None
    notes: Optional[str] = None
    is_active: bool
    viewed_by_employee: bool
    viewed_at: Optional[datetime] = None

    class Config:
        from_attributes = True
