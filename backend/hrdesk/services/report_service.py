from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from hrdesk.core.logger import get_logger
from hrdesk.models.attendance import AttendanceRecord
from hrdesk.services.attendance_service import query_records
from hrdesk.utils.export import (
    CSV_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
    build_csv,
    build_xlsx,
    format_export_date,
    format_export_time,
)
from hrdesk.utils.timeconv import decimal_hours_to_clock

logger = get_logger("hrdesk.reports")

ATTENDANCE_HEADERS = [
    "Date",
    "Employee Code",
    "Employee Name",
    "Department",
    "Status",
    "Check In",
    "Break In",
    "Break Out",
    "Check Out",
    "Total Hours",
    "Overtime",
    "Edited",
    "Edit Reason",
]


def attendance_rows(records: list[AttendanceRecord]) -> list[list]:
    rows = []
    for record in records:
        employee = record.employee
        rows.append([
            format_export_date(record.date),
            employee.employee_code if employee else "-",
            employee.name if employee else "-",
            (employee.department if employee else None) or "-",
            record.status.value,
            format_export_time(record.check_in_time),
            format_export_time(record.break_in_time),
            format_export_time(record.break_out_time),
            format_export_time(record.check_out_time),
            decimal_hours_to_clock(record.total_hours),
            decimal_hours_to_clock(record.overtime),
            "Yes" if record.has_been_edited else "No",
            record.edit_reason or "",
        ])
    return rows


def export_attendance(
    db: Session,
    start_date: date,
    end_date: date,
    fmt: str = "csv",
    employee_id: Optional[int] = None,
) -> tuple[bytes, str, str]:
    if end_date < start_date:
        raise HTTPException(status_code=400, detail="End date must be on or after start date")

    records = query_records(db, employee_id=employee_id, start_date=start_date, end_date=end_date).order_by(
        AttendanceRecord.date.asc(), AttendanceRecord.employee_id.asc()
    ).all()
    rows = attendance_rows(records)
    base_name = f"attendance_{start_date.isoformat()}_to_{end_date.isoformat()}"

    if fmt == "xlsx":
        content = build_xlsx(ATTENDANCE_HEADERS, rows, sheet_title="Attendance")
        filename, media_type = f"{base_name}.xlsx", XLSX_MEDIA_TYPE
    elif fmt == "csv":
        content = build_csv(ATTENDANCE_HEADERS, rows)
        filename, media_type = f"{base_name}.csv", CSV_MEDIA_TYPE
    else:
        raise HTTPException(status_code=400, detail="Unsupported export format. Use csv or xlsx")

    logger.info(f"Exported {len(rows)} attendance records to {filename}")
    return content, filename, media_type
