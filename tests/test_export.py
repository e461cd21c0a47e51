import io
from datetime import date, datetime

from openpyxl import load_workbook

from hrdesk.utils.export import (
    build_csv,
    build_xlsx,
    content_disposition,
    format_break_duration,
    format_export_date,
    format_export_time,
    safe_filename_part,
)


def test_format_helpers():
    assert format_break_duration(0) == "0 minutes"
    assert format_break_duration(None) == "0 minutes"
    assert format_break_duration(45) == "45m"
    assert format_break_duration(60) == "1h"
    assert format_break_duration(65) == "1h 5m"
    assert format_export_date(datetime(2025, 3, 10, 9, 0)) == "2025-03-10"
    assert format_export_date(None) == "-"
    assert format_export_time(datetime(2025, 3, 10, 9, 5, 7)) == "09:05:07"
    assert format_export_time(None) == "-"
    assert safe_filename_part(" Ravi  Kumar ") == "Ravi_Kumar"
    assert safe_filename_part('Ravi "RK" Kumar/HR') == "Ravi_RK_KumarHR"


def test_content_disposition_has_ascii_fallback():
    assert content_disposition("report.csv") == "attachment; filename=\"report.csv\"; filename*=UTF-8''report.csv"
    header = content_disposition("breaks_李明.csv")
    assert header.startswith('attachment; filename="breaks_.csv"')
    assert header.endswith("filename*=UTF-8''breaks_%E6%9D%8E%E6%98%8E.csv")
    header.encode("latin-1")


def test_build_csv_quotes_everything_with_bom():
    content = build_csv(["Name", "Note"], [["Ravi", 'said "hi"'], ["Meera", None]])
    text = content.decode("utf-8")
    assert text.startswith("\ufeff")
    assert text.lstrip("\ufeff").splitlines() == [
        '"Name","Note"',
        '"Ravi","said ""hi"""',
        '"Meera",""',
    ]


def test_build_xlsx():
    content = build_xlsx(["Date", "Hours"], [[date(2025, 3, 10).isoformat(), "08:30"]], sheet_title="Attendance")
    wb = load_workbook(io.BytesIO(content))
    ws = wb["Attendance"]
    assert ws["A1"].value == "Date"
    assert ws["A1"].font.bold is True
    assert ws["B2"].value == "08:30"
    assert ws.freeze_panes == "A2"


def test_attendance_report_export(client, admin_headers, employee):
    client.post(
        "/attendance/records",
        json={"records": [{
            "employee_id": employee.id,
            "date": "2025-03-10",
            "check_in_time": "09:00",
            "check_out_time": "17:30",
        }]},
        headers=admin_headers,
    )

    res = client.get("/reports/export?start_date=2025-03-06&end_date=2025-04-05&format=csv", headers=admin_headers)
    assert res.status_code == 200
    lines = res.content.decode("utf-8-sig").splitlines()
    assert lines[0].startswith('"Date","Employee Code","Employee Name"')
    assert '"08:30"' in lines[1]

    res = client.get("/reports/export?start_date=2025-03-06&end_date=2025-04-05&format=xlsx", headers=admin_headers)
    assert res.status_code == 200
    assert "attendance_2025-03-06_to_2025-04-05.xlsx" in res.headers["content-disposition"]
    ws = load_workbook(io.BytesIO(res.content)).active
    assert ws["B2"].value == "EMP20250001"


def test_attendance_report_rejects_inverted_range(client, admin_headers):
    res = client.get("/reports/export?start_date=2025-04-05&end_date=2025-03-06", headers=admin_headers)
    assert res.status_code == 400


def test_attendance_report_rejects_unknown_format(client, admin_headers):
    res = client.get("/reports/export?start_date=2025-03-06&end_date=2025-04-05&format=pdf", headers=admin_headers)
    assert res.status_code == 422
