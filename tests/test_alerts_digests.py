from datetime import datetime, timedelta

import pytest

from budget_tracker.core.config import settings
from budget_tracker.db import crud


def _user_id(client, headers):
    return client.get("/api/auth/me", headers=headers).json()["id"]


def _alert(db, user_id, message, created_at):
    alert = crud.create_budget_alert(db, user_id, {
        "type": "budget_warning",
        "message": message,
        "amount": 420,
        "budget": 500,
        "percentage": 84,
    })
    alert.created_at = created_at
    db.commit()
    return alert.id


def test_alerts_newest_first_and_mark_read(client, db, auth_headers, other_headers):
    user_id = _user_id(client, auth_headers)
    older = _alert(db, user_id, "older", datetime(2025, 11, 2))
    newer = _alert(db, user_id, "newer", datetime(2025, 11, 9))

    alerts = client.get("/api/alerts/", headers=auth_headers).json()["alerts"]
    assert [a["message"] for a in alerts] == ["newer", "older"]
    assert all(a["is_read"] is False for a in alerts)

    assert client.get("/api/alerts/", headers=other_headers).json()["alerts"] == []

    marked = client.patch("/api/alerts/", json={"alert_id": older}, headers=auth_headers)
    assert marked.status_code == 200
    assert marked.json()["alert"]["is_read"] is True

    assert client.patch("/api/alerts/", json={}, headers=auth_headers).status_code == 400
    assert client.patch("/api/alerts/", json={"alert_id": newer}, headers=other_headers).status_code == 404


def test_digests_are_limited(client, db, auth_headers):
    user_id = _user_id(client, auth_headers)
    start = datetime(2025, 9, 7)
    for week in range(7):
        digest = crud.create_weekly_digest(db, user_id, {
            "week_start": start + timedelta(weeks=week),
            "week_end": start + timedelta(weeks=week, days=6),
            "total_spent": 10 * (week + 1),
            "category_breakdown": {"groceries": 10 * (week + 1)},
            "message": f"week {week}",
        })
        digest.created_at = start + timedelta(weeks=week, days=7)
        db.commit()

    default = client.get("/api/digests/", headers=auth_headers).json()["digests"]
    assert len(default) == settings.DIGEST_DEFAULT_LIMIT
    assert default[0]["message"] == "week 6"
    assert default[0]["category_breakdown"] == {"groceries": 70}

    two = client.get("/api/digests/?limit=2", headers=auth_headers).json()["digests"]
    assert [d["message"] for d in two] == ["week 6", "week 5"]

    assert client.get("/api/digests/?limit=0", headers=auth_headers).status_code == 400


def test_manual_trigger_creates_alerts(client, auth_headers):
    client.post(
        "/api/expenses/",
        json={"amount": 480, "description": "Rent share", "category": "rent", "date": datetime.utcnow().isoformat()},
        headers=auth_headers,
    )

    response = client.post("/api/scheduler/test", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Weekly tasks triggered successfully"

    alerts = client.get("/api/alerts/", headers=auth_headers).json()["alerts"]
    assert len(alerts) == 1
    assert alerts[0]["type"] == "budget_warning"
    assert alerts[0]["percentage"] == pytest.approx(96.0)


def test_manual_trigger_only_in_development(client, auth_headers, monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    response = client.post("/api/scheduler/test", headers=auth_headers)
    assert response.status_code == 403


def test_scheduler_status_and_budget(client, auth_headers):
    status = client.get("/api/scheduler/status", headers=auth_headers).json()
    assert status["running"] is False
    assert status["jobs"][0]["id"] == "weekly_budget_tasks"

    client.post(
        "/api/expenses/",
        json={"amount": 50, "description": "Books", "category": "academic", "date": datetime.utcnow().isoformat()},
        headers=auth_headers,
    )
    budget = client.get("/api/scheduler/budget", headers=auth_headers).json()
    assert budget["user_email"] == "alice@example.com"
    assert budget["total_spent"] == 50
    assert budget["percentage_used"] == pytest.approx(10.0)
    assert budget["is_over_80_percent"] is False
