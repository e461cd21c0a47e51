import csv
import io
import re
from datetime import date, datetime
from typing import Any, Sequence
from urllib.parse import quote

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF")
BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)


def format_export_date(value: date | datetime | None) -> str:
    if value is None:
        return "-"
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def format_export_time(value: datetime | None) -> str:
    # HH:MM:SS keeps spreadsheet imports consistent.
    if value is None:
        return "-"
    return value.strftime("%H:%M:%S")


def format_break_duration(minutes: int | None) -> str:
    total = int(minutes or 0)
    if total == 0:
        return "0 minutes"
    hours, rest = divmod(total, 60)
    if hours:
        return f"{hours}h {rest}m" if rest else f"{hours}h"
    return f"{rest}m"


def safe_filename_part(value: str) -> str:
    value = re.sub(r"[^\w\s.-]", "", value)
    return re.sub(r"\s+", "_", value.strip())


def content_disposition(filename: str) -> str:
    # Latin-1 headers: ASCII fallback plus the RFC 5987 UTF-8 form.
    fallback = filename.encode("ascii", "ignore").decode("ascii") or "export"
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def build_csv(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if field is None else field for field in row])
    # BOM so spreadsheet apps pick up UTF-8.
    return ("\ufeff" + buffer.getvalue()).encode("utf-8")


def build_xlsx(headers: Sequence[str], rows: Sequence[Sequence[Any]], sheet_title: str = "Export") -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title[:31]

    for col, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.border = BORDER
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for row_idx, row in enumerate(rows, start=2):
        for col, value in enumerate(row, start=1):
            cell = ws.cell(row=row_idx, column=col, value=value)
            cell.border = BORDER

    for col, header in enumerate(headers, start=1):
        width = max([len(str(header))] + [len(str(r[col - 1])) for r in rows if len(r) >= col])
        ws.column_dimensions[get_column_letter(col)].width = min(width + 2, 50)
    ws.freeze_panes = "A2"

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
