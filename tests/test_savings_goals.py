def _goal(**overrides):
    payload = {
        "goal_name": "New laptop",
        "target_amount": 1000,
        "target_date": "2026-06-01T00:00:00Z",
        "category": "tech",
    }
    payload.update(overrides)
    return payload


def test_create_savings_goal(client, auth_headers):
    response = client.post("/api/savings-goals/", json=_goal(), headers=auth_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["goal_name"] == "New laptop"
    assert body["current_amount"] == 0
    assert body["is_completed"] is False
    assert body["target_date"].startswith("2026-06-01T00:00:00")


def test_create_savings_goal_validation(client, auth_headers):
    assert client.post("/api/savings-goals/", json=_goal(goal_name=""), headers=auth_headers).status_code == 400
    assert client.post("/api/savings-goals/", json=_goal(target_amount=0), headers=auth_headers).status_code == 400
    assert client.post("/api/savings-goals/", json=_goal(target_date="soon"), headers=auth_headers).status_code == 400


def test_list_orders_open_goals_by_target_date(client, auth_headers):
    late = client.post("/api/savings-goals/", json=_goal(goal_name="late", target_date="2027-01-01T00:00:00Z"), headers=auth_headers).json()
    client.post("/api/savings-goals/", json=_goal(goal_name="soon", target_date="2026-01-01T00:00:00Z"), headers=auth_headers)
    done = client.post("/api/savings-goals/", json=_goal(goal_name="done", target_date="2025-01-01T00:00:00Z"), headers=auth_headers).json()
    client.patch(f"/api/savings-goals/{done['id']}", json={"current_amount": 1000}, headers=auth_headers)

    names = [goal["goal_name"] for goal in client.get("/api/savings-goals/", headers=auth_headers).json()]
    assert names == ["soon", "late", "done"]
    assert late["id"]


def test_patch_completes_goal_when_target_reached(client, auth_headers):
    goal = client.post("/api/savings-goals/", json=_goal(target_amount=100), headers=auth_headers).json()

    partial = client.patch(f"/api/savings-goals/{goal['id']}", json={"current_amount": 40}, headers=auth_headers)
    assert partial.status_code == 200
    assert partial.json()["current_amount"] == 40
    assert partial.json()["is_completed"] is False

    reached = client.patch(f"/api/savings-goals/{goal['id']}", json={"current_amount": 100}, headers=auth_headers)
    assert reached.json()["is_completed"] is True

    forced = client.patch(
        f"/api/savings-goals/{goal['id']}",
        json={"current_amount": 10, "is_completed": True},
        headers=auth_headers,
    )
    assert forced.json()["is_completed"] is True

    negative = client.patch(f"/api/savings-goals/{goal['id']}", json={"current_amount": -1}, headers=auth_headers)
    assert negative.status_code == 400


def test_delete_and_ownership(client, auth_headers, other_headers):
    goal = client.post("/api/savings-goals/", json=_goal(), headers=auth_headers).json()

    assert client.patch(f"/api/savings-goals/{goal['id']}", json={"current_amount": 5}, headers=other_headers).status_code == 404
    assert client.delete(f"/api/savings-goals/{goal['id']}", headers=other_headers).status_code == 404

    deleted = client.delete(f"/api/savings-goals/{goal['id']}", headers=auth_headers)
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "Savings goal deleted successfully"
    assert client.get("/api/savings-goals/", headers=auth_headers).json() == []
