from launchpro.config import settings


def test_health(anonymous):
    response = anonymous.get("/api/health")
    assert response.status_code == 200


def test_login_sets_session_cookie(anonymous, admin_user):
    response = anonymous.post("/api/auth/login", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "alice"
    assert "password" not in body
    assert "password_hash" not in body

    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f"{settings.SESSION_COOKIE_NAME}=")
    assert "HttpOnly" in cookie
    assert "Max-Age=86400" in cookie
    assert "samesite=lax" in cookie.lower()
    assert "Secure" not in cookie


def test_login_wrong_password(anonymous, admin_user):
    response = anonymous.post("/api/auth/login", json={"username": "alice", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_login_unknown_user(anonymous):
    response = anonymous.post("/api/auth/login", json={"username": "ghost", "password": "secret123"})
    assert response.status_code == 401


def test_login_missing_fields(anonymous):
    response = anonymous.post("/api/auth/login", json={"username": "alice"})
    assert response.status_code == 400
    body = response.json()
    assert body["errors"][0]["field"] == "password"


def test_me_requires_session(anonymous):
    response = anonymous.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json() == {"message": "Not authenticated"}


def test_me_rejects_tampered_cookie(anonymous):
    anonymous.cookies.set(settings.SESSION_COOKIE_NAME, "not-a-token")
    assert anonymous.get("/api/auth/me").status_code == 401


def test_me_returns_user_view(admin_client):
    response = admin_client.get("/api/auth/me")
    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "alice"
    assert body["role"] == "admin"
    assert "password_hash" not in body


def test_logout_revokes_session(admin_user, login):
    client = login("alice")
    token = client.cookies.get(settings.SESSION_COOKIE_NAME)

    response = client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully"

    # replaying the old cookie must not work once the session is revoked
    client.cookies.set(settings.SESSION_COOKIE_NAME, token)
    assert client.get("/api/auth/me").status_code == 401


def test_error_shape_is_documented(anonymous):
    schema = anonymous.get("/openapi.json").json()
    assert "ErrorResponse" in schema["components"]["schemas"]
    responses = schema["paths"]["/api/projects"]["post"]["responses"]
    assert responses["403"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
