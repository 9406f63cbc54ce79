def test_register_returns_created_user(client):
    response = client.post("/api/auth/register", json={
        "name": "Alice",
        "email": "alice@example.com",
        "password": "secret123",
    })
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Alice"
    assert body["email"] == "alice@example.com"
    assert body["id"]
    assert "password_hash" not in body


def test_register_rejects_duplicates_and_missing_fields(client, make_user):
    make_user()
    duplicate = client.post("/api/auth/register", json={
        "name": "Alice again",
        "email": "alice@example.com",
        "password": "other",
    })
    assert duplicate.status_code == 400
    assert duplicate.json()["detail"] == "User already exists"

    missing = client.post("/api/auth/register", json={"email": "carol@example.com"})
    assert missing.status_code == 400
    assert missing.json()["detail"] == "Validation error"


def test_login_with_wrong_password(client, make_user):
    make_user()
    response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope"})
    assert response.status_code == 401


def test_session_cookie_authenticates(client, make_user):
    make_user()
    login = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})
    assert login.status_code == 200
    assert "budget_session" in login.cookies

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["email"] == "alice@example.com"

    client.post("/api/auth/logout")
    client.cookies.clear()
    assert client.get("/api/auth/me").status_code == 401


def test_bearer_token_authenticates(client, auth_headers):
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Alice"


def test_invalid_token_is_rejected(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_protected_endpoints_require_session(client):
    for method, path in [
        ("get", "/api/expenses/"),
        ("get", "/api/expenses/summary"),
        ("get", "/api/savings-goals/"),
        ("get", "/api/meal-plans/"),
        ("get", "/api/shopping-lists/"),
        ("get", "/api/grocery-day/"),
        ("get", "/api/recommendations/"),
        ("get", "/api/alerts/"),
        ("get", "/api/digests/"),
        ("post", "/api/scheduler/test"),
    ]:
        response = getattr(client, method)(path)
        assert response.status_code == 401, path


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] == "connected"
