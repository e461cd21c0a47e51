def _warn(client, headers, employee_id, **extra):
    payload = {
        "employee_id": employee_id,
        "warning_type": "LATE_ARRIVAL",
        "warning_message": "Arrived after 10:00 three times this cycle",
        "severity": "MEDIUM",
        "related_date": "2025-03-10",
    }
    payload.update(extra)
    return client.post("/warnings", json=payload, headers=headers)


def test_issue_and_read_warning(client, admin_headers, employee_headers, employee):
    res = _warn(client, admin_headers, employee.id)
    assert res.status_code == 200
    warning = res.json()["data"]
    assert warning["viewed_by_employee"] is False

    unviewed = client.get("/warnings/unviewed", headers=employee_headers).json()["data"]
    assert [w["id"] for w in unviewed] == [warning["id"]]

    res = client.post(f"/warnings/{warning['id']}/mark-read", headers=employee_headers)
    data = res.json()["data"]
    assert data["viewed_by_employee"] is True
    assert data["viewed_at"] is not None

    assert client.get("/warnings/unviewed", headers=employee_headers).json()["data"] == []


def test_employee_cannot_issue_or_read_others(client, admin_headers, employee_headers, other_employee):
    res = _warn(client, employee_headers, other_employee.id)
    assert res.status_code == 403

    warning_id = _warn(client, admin_headers, other_employee.id).json()["data"]["id"]
    res = client.post(f"/warnings/{warning_id}/mark-read", headers=employee_headers)
    assert res.status_code == 403


def test_warning_filters(client, admin_headers, employee, other_employee):
    _warn(client, admin_headers, employee.id, severity="HIGH")
    _warn(client, admin_headers, other_employee.id, severity="LOW")

    high = client.get("/warnings?severity=HIGH", headers=admin_headers).json()["data"]
    assert [w["employee_id"] for w in high] == [employee.id]

    everyone = client.get("/warnings", headers=admin_headers).json()["data"]
    assert len(everyone) == 2


def test_warning_requires_message(client, admin_headers, employee):
    res = _warn(client, admin_headers, employee.id, warning_message="  ")
    assert res.status_code == 422


def test_deactivated_warning_hidden_by_default(client, admin_headers, employee):
    warning_id = _warn(client, admin_headers, employee.id).json()["data"]["id"]
    client.put(f"/warnings/{warning_id}", json={"is_active": False}, headers=admin_headers)

    assert client.get("/warnings", headers=admin_headers).json()["data"] == []
    assert len(client.get("/warnings?active_only=false", headers=admin_headers).json()["data"]) == 1


def test_penalty_lifecycle(client, admin_headers, employee_headers, employee):
    res = client.post(
        "/penalties",
        json={
            "employee_id": employee.id,
            "penalty_type": "DEDUCTION",
            "amount": 250,
            "description": "Unapproved absence",
            "penalty_date": "2025-03-12",
        },
        headers=admin_headers,
    )
    assert res.status_code == 200
    penalty = res.json()["data"]
    assert penalty["amount"] == 250

    mine = client.get("/penalties", headers=employee_headers).json()["data"]
    assert [p["id"] for p in mine] == [penalty["id"]]

    client.post(f"/penalties/{penalty['id']}/mark-read", headers=employee_headers)
    assert client.get("/penalties/unviewed", headers=employee_headers).json()["data"] == []

    res = client.delete(f"/penalties/{penalty['id']}", headers=admin_headers)
    assert res.json()["success"] is True
    assert client.get("/penalties", headers=admin_headers).json()["data"] == []


def test_penalty_amount_cannot_be_negative(client, admin_headers, employee):
    res = client.post(
        "/penalties",
        json={"employee_id": employee.id, "penalty_type": "DEDUCTION", "amount": -1, "description": "x"},
        headers=admin_headers,
    )
    assert res.status_code == 422
    assert res.json()["detail"] == "Amount cannot be negative"


def test_penalty_update_ignores_null_for_required_fields(client, admin_headers, employee):
    penalty = client.post(
        "/penalties",
        json={"employee_id": employee.id, "penalty_type": "DEDUCTION", "amount": 100, "description": "Late arrival"},
        headers=admin_headers,
    ).json()["data"]

    res = client.put(
        f"/penalties/{penalty['id']}",
        json={"description": None, "penalty_type": None, "is_active": None, "notes": "Second offence"},
        headers=admin_headers,
    )
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["description"] == "Late arrival"
    assert data["penalty_type"] == "DEDUCTION"
    assert data["is_active"] is True
    assert data["notes"] == "Second offence"
