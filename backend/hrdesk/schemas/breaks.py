from pydantic import BaseModel, field_validator, model_validator
from datetime import date, datetime
from typing import Optional

from hrdesk.models.break_session import BreakStatus


class BreakTargetRequest(BaseModel):
    employee_id: Optional[int] = None


class ManualBreakCreate(BaseModel):
    employee_id: int
    break_date: date
    start_time: str
    end_time: str
    reason: str

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, value: str):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Reason is required")
        return cleaned


class BreakUpdate(BaseModel):
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    reason: str

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, value: str):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Reason is required")
        return cleaned

    @model_validator(mode="after")
    def validate_any_change(self):
        if not self.start_time and not self.end_time:
            raise ValueError("Provide a start time or an end time")
        return self


class BreakDeleteRequest(BaseModel):
    reason: str

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, value: str):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Reason is required")
        return cleaned


class BreakOut(BaseModel):
    id: int
    employee_id: int
    employee_code: Optional[str] = None
    employee_name: Optional[str] = None
    break_date: date
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: Optional[int] = None
    duration_display: str
    status: BreakStatus
    is_compliant: Optional[bool] = None
    edit_reason: Optional[str] = None
    is_deleted: bool = False
    delete_reason: Optional[str] = None
    deleted_at: Optional[datetime] = None
