import logging

from fastapi.testclient import TestClient

from budget_tracker.db.session import get_db
from budget_tracker.main import app


def test_unhandled_error_returns_generic_500(client, caplog):
    def broken_db():
        raise RuntimeError("connection pool exhausted")

    app.dependency_overrides[get_db] = broken_db
    failing_client = TestClient(app, raise_server_exceptions=False)

    with caplog.at_level(logging.ERROR):
        response = failing_client.get("/api/health")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert "Unhandled error on GET /api/health" in caplog.text
    assert "connection pool exhausted" not in response.text


def test_validation_error_returns_400(client, auth_headers):
    response = client.post("/api/expenses/", json={"amount": "lots"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Validation error"
    assert response.json()["errors"]


def test_manual_trigger_reports_failed_run(client, auth_headers, budget_scheduler, monkeypatch):
    def boom(now=None):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(budget_scheduler, "check_budget_alerts", boom)

    response = client.post("/api/scheduler/test", headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"detail": "Weekly tasks failed"}


def test_manual_trigger_succeeds(client, auth_headers):
    response = client.post("/api/scheduler/test", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Weekly tasks triggered successfully"
