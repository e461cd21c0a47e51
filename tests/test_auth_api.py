from datetime import datetime

from hrdesk.services.employee_service import generate_employee_code


def test_login_with_employee_code(client, employee):
    res = client.post("/auth/login", json={"employee_code": "emp20250001", "password": "Secret@123"})
    assert res.status_code == 200
    body = res.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["name"] == "Ravi Kumar"

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"}).json()
    assert me["employee_code"] == "EMP20250001"


def test_admin_login_with_email(client, admin):
    res = client.post("/auth/login", json={"employee_code": "admin001@example.com", "password": "Secret@123"})
    assert res.status_code == 200
    assert res.json()["user"]["role"] == "admin"


def test_login_rejects_bad_password(client, employee):
    res = client.post("/auth/login", json={"employee_code": "EMP20250001", "password": "nope"})
    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid credentials"


def test_invalid_token(client):
    res = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid or expired token"


def test_generate_employee_code():
    assert generate_employee_code(41) == f"EMP{datetime.now().year}0042"


def test_admin_creates_employee_with_temp_password(client, admin_headers):
    res = client.post(
        "/admin/employees",
        json={"name": "Kiran Rao", "email": "kiran@example.com", "daily_hours": 8.20},
        headers=admin_headers,
    )
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["employee_code"].startswith("EMP")
    assert data["daily_hours"] == 8.2
    assert len(data["temp_password"]) == 10

    login = client.post(
        "/auth/login",
        json={"employee_code": data["employee_code"], "password": data["temp_password"]},
    )
    assert login.status_code == 200


def test_create_employee_rejects_duplicates_and_bad_hours(client, admin_headers, employee):
    res = client.post(
        "/admin/employees",
        json={"employee_code": "EMP20250001", "name": "Copy"},
        headers=admin_headers,
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "Employee code already exists"

    res = client.post(
        "/admin/employees",
        json={"name": "Odd Hours", "daily_hours": 8.75},
        headers=admin_headers,
    )
    assert res.status_code == 422
    assert res.json()["detail"] == "Daily hours must be in H.MM format, e.g. 8.20"


def test_list_and_update_employees(client, admin_headers, employee, other_employee):
    listing = client.get("/admin/employees?search=meera", headers=admin_headers).json()
    assert [e["employee_code"] for e in listing] == ["EMP20250002"]

    res = client.put(
        f"/admin/employees/{employee.id}",
        json={"department": "Operations", "daily_hours": 7.30},
        headers=admin_headers,
    )
    assert res.json()["department"] == "Operations"

    res = client.put(f"/admin/employees/{employee.id}", json={"is_active": False}, headers=admin_headers)
    assert res.json()["is_active"] is False
    active = client.get("/admin/employees", headers=admin_headers).json()
    assert employee.id not in [e["id"] for e in active]


def test_employee_cannot_manage_employees(client, employee_headers):
    res = client.get("/admin/employees", headers=employee_headers)
    assert res.status_code == 403


def test_update_employee_ignores_null_active_flag(client, admin_headers, employee):
    res = client.put(
        f"/admin/employees/{employee.id}",
        json={"is_active": None, "department": "Billing"},
        headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["is_active"] is True
    assert res.json()["department"] == "Billing"
