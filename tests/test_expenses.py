from datetime import datetime, timedelta


def _expense(**overrides):
    payload = {
        "amount": 12.5,
        "description": "Bus pass",
        "category": "transport",
        "date": datetime.utcnow().isoformat() + "Z",
    }
    payload.update(overrides)
    return payload


def test_create_expense(client, auth_headers):
    response = client.post("/api/expenses/", json=_expense(), headers=auth_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Expense created successfully"
    assert body["expense"]["amount"] == 12.5
    assert body["expense"]["category"] == "transport"
    assert body["expense"]["id"]


def test_create_expense_validation(client, auth_headers):
    for payload in [
        _expense(amount=0),
        _expense(description=""),
        _expense(category="luxury"),
        _expense(category="other"),
        _expense(category="other", custom_category_name="   "),
        _expense(date="yesterday"),
    ]:
        response = client.post("/api/expenses/", json=payload, headers=auth_headers)
        assert response.status_code == 400, payload
        assert response.json()["detail"] == "Validation error"

    ok = client.post(
        "/api/expenses/",
        json=_expense(category="other", custom_category_name="Gym"),
        headers=auth_headers,
    )
    assert ok.status_code == 201
    assert ok.json()["expense"]["custom_category_name"] == "Gym"


def test_list_expenses_newest_first_and_range(client, auth_headers):
    now = datetime.utcnow()
    old = (now - timedelta(days=60)).isoformat()
    client.post("/api/expenses/", json=_expense(description="old", date=old), headers=auth_headers)
    client.post("/api/expenses/", json=_expense(description="today", date=now.isoformat()), headers=auth_headers)

    everything = client.get("/api/expenses/", headers=auth_headers).json()["expenses"]
    assert [e["description"] for e in everything] == ["today", "old"]

    today = client.get("/api/expenses/?range=day", headers=auth_headers).json()["expenses"]
    assert [e["description"] for e in today] == ["today"]

    bad = client.get("/api/expenses/?range=decade", headers=auth_headers)
    assert bad.status_code == 400


def test_summary_groups_by_category(client, auth_headers):
    client.post("/api/expenses/", json=_expense(amount=10, category="rent"), headers=auth_headers)
    client.post("/api/expenses/", json=_expense(amount=5, category="rent"), headers=auth_headers)
    client.post("/api/expenses/", json=_expense(amount=7.5, category="leisure"), headers=auth_headers)

    response = client.get("/api/expenses/summary?range=month", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == [
        {"category": "leisure", "total": 7.5},
        {"category": "rent", "total": 15.0},
    ]


def test_update_and_delete_expense(client, auth_headers):
    created = client.post("/api/expenses/", json=_expense(), headers=auth_headers).json()["expense"]

    updated = client.put(f"/api/expenses/{created['id']}", json={"amount": 20}, headers=auth_headers)
    assert updated.status_code == 200
    assert updated.json()["amount"] == 20
    assert updated.json()["description"] == "Bus pass"

    empty = client.put(f"/api/expenses/{created['id']}", json={}, headers=auth_headers)
    assert empty.status_code == 400

    no_name = client.put(f"/api/expenses/{created['id']}", json={"category": "other"}, headers=auth_headers)
    assert no_name.status_code == 400

    deleted = client.delete(f"/api/expenses/{created['id']}", headers=auth_headers)
    assert deleted.status_code == 204
    assert client.get("/api/expenses/", headers=auth_headers).json()["expenses"] == []


def test_expenses_are_private(client, auth_headers, other_headers):
    created = client.post("/api/expenses/", json=_expense(), headers=auth_headers).json()["expense"]

    assert client.get("/api/expenses/", headers=other_headers).json()["expenses"] == []
    assert client.put(f"/api/expenses/{created['id']}", json={"amount": 1}, headers=other_headers).status_code == 404
    assert client.delete(f"/api/expenses/{created['id']}", headers=other_headers).status_code == 404
