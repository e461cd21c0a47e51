from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from hrdesk.core.dependencies import get_current_admin
from hrdesk.database.session import get_db
from hrdesk.models.user import Employee
from hrdesk.services import report_service
from hrdesk.utils.export import content_disposition

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/export")
def export_attendance(
    start_date: date,
    end_date: date,
    format: Literal["csv", "xlsx"] = Query("csv"),
    employee_id: Optional[int] = None,
    admin: Employee = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    content, filename, media_type = report_service.export_attendance(
        db,
        start_date,
        end_date,
        fmt=format,
        employee_id=employee_id,
    )
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": content_disposition(filename)},
    )
