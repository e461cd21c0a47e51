from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Optional

from hrdesk.models.attendance import AttendanceStatus
from hrdesk.utils.timeconv import clock_to_minutes


def _validate_clock(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    cleaned = value.strip()
    if not cleaned:
        return None
    if "T" in cleaned:
        return cleaned
    parts = cleaned.split(":")
    minutes = clock_to_minutes(":".join(parts[:2])) if len(parts) in (2, 3) else None
    if minutes is None or not 0 <= int(parts[0]) <= 23 or not 0 <= int(parts[1]) <= 59:
        raise ValueError("Time must be in HH:MM format")
    return cleaned


def _validate_duration(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    cleaned = value.strip()
    if not cleaned:
        return None
    minutes = clock_to_minutes(cleaned)
    if minutes is None or minutes < 0 or not 0 <= int(cleaned.split(":")[1]) <= 59:
        raise ValueError("Duration must be in HH:MM format")
    return cleaned


# -------- IMPORT --------
class AttendanceImportRow(BaseModel):
    employee_id: int
    date: date
    status: AttendanceStatus = AttendanceStatus.PRESENT
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    break_in_time: Optional[str] = None
    break_out_time: Optional[str] = None
    total_hours: Optional[float] = None
    shift: Optional[str] = None

    @field_validator("check_in_time", "check_out_time", "break_in_time", "break_out_time")
    @classmethod
    def validate_clock(cls, value: Optional[str]):
        return _validate_clock(value)


class AttendanceImportRequest(BaseModel):
    records: list[AttendanceImportRow]
    import_source: str = "csv_upload"

    @field_validator("records")
    @classmethod
    def validate_records(cls, value: list[AttendanceImportRow]):
        if not value:
            raise ValueError("records cannot be empty")
        return value


# -------- UPDATE --------
class AttendanceUpdate(BaseModel):
    status: Optional[AttendanceStatus] = None
    shift: Optional[str] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    break_in_time: Optional[str] = None
    break_out_time: Optional[str] = None
    # HH:MM, as typed into the edit dialog
    overtime: Optional[str] = None
    total_hours: Optional[str] = None
    edit_reason: str

    @field_validator("check_in_time", "check_out_time", "break_in_time", "break_out_time")
    @classmethod
    def validate_clock(cls, value: Optional[str]):
        return _validate_clock(value)

    @field_validator("overtime", "total_hours")
    @classmethod
    def validate_duration(cls, value: Optional[str]):
        return _validate_duration(value)

    @field_validator("edit_reason")
    @classmethod
    def validate_reason(cls, value: str):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Edit reason is required")
        return cleaned


class AttendanceBulkDeleteRequest(BaseModel):
    ids: list[int]


class AttendanceDateDeleteRequest(BaseModel):
    date: date
    employee_id: Optional[int] = None


# -------- RESPONSE --------
class EditHistoryOut(BaseModel):
    id: int
    attendance_id: int
    edited_by: Optional[int] = None
    edited_by_name: str
    edited_by_role: str
    field_changed: str
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    change_reason: str
    created_at: datetime

    class Config:
        from_attributes = True


class AttendanceRecordOut(BaseModel):
    id: int
    employee_id: int
    employee_code: Optional[str] = None
    employee_name: Optional[str] = None
    department: Optional[str] = None
    date: date
    status: AttendanceStatus
    shift: Optional[str] = None
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    break_in_time: Optional[datetime] = None
    break_out_time: Optional[datetime] = None
    total_hours: float
    total_hours_display: str
    overtime: float
    overtime_display: str
    break_display: str
    has_been_edited: bool
    edit_reason: Optional[str] = None
    edited_at: Optional[datetime] = None
    import_source: Optional[str] = None


class PayCycleOut(BaseModel):
    key: str
    start: date
    end: date
    label: str
    record_count: int = 0


class EmployeeSummaryOut(BaseModel):
    cycle: PayCycleOut
    total_records: int
    present: int
    absent: int
    current_total_hours: str
    current_total_hours_short: str
    original_total_hours: str
    hours_adjusted: str
    average_work_hours: str
    working_days: int
    hours_goal: str
    hours_remaining: str
    goal_met: bool
    status_counts: dict[str, int]
