"""
Tests for the authentication endpoints and session cookie
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from livestockmart.core.app_factory import create_application
from livestockmart.core.config import Settings

from conftest import TEST_SECRET


def _get_with_token(client, path, token):
    client.cookies.clear()
    return client.get(path, headers={"Cookie": f"token={token}"})


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_register_sets_session_cookie(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Asha Rao", "email": "Asha@Example.com", "password": "secret123"},
    )
    assert response.status_code == 201
    user = response.json()["user"]
    assert set(user) == {"id", "name", "email"}
    assert user["email"] == "asha@example.com"

    cookie = response.headers["set-cookie"]
    assert cookie.startswith("token=")
    assert "HttpOnly" in cookie
    assert "SameSite=lax" in cookie or "samesite=lax" in cookie.lower()
    assert "Max-Age=604800" in cookie
    assert "Domain" not in cookie
    assert "Secure" not in cookie


def test_duplicate_email_case_insensitive(client, register):
    register(email="a@x.com", password="pw1pw1")
    response = client.post(
        "/api/auth/register",
        json={"name": "Other", "email": "A@X.com", "password": "pw2pw2"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already in use"


def test_register_validation(client):
    response = client.post("/api/auth/register", json={"email": "a@x.com"})
    assert response.status_code == 400
    assert "name is required" in response.json()["detail"]


def test_login_then_me_returns_same_identity(client, register):
    register(name="Asha Rao", email="asha@example.com", password="secret123")
    client.cookies.clear()

    login = client.post("/api/auth/login", json={"email": "asha@example.com", "password": "secret123"})
    assert login.status_code == 200
    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["user"] == login.json()["user"]


def test_login_failures_are_uniform(client, register):
    register(email="asha@example.com", password="secret123")
    wrong_password = client.post("/api/auth/login", json={"email": "asha@example.com", "password": "wrong-one"})
    unknown_email = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "secret123"})
    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {"detail": "Invalid email or password"}


def test_me_without_cookie(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authenticated"


@pytest.mark.parametrize("path", ["/api/auth/me", "/api/user/state", "/api/orders"])
def test_expired_or_tampered_token_yields_401(client, register, path):
    user = register()
    now = datetime.now(tz=timezone.utc)
    expired = jwt.encode(
        {"sub": user["id"], "iat": now - timedelta(days=8), "exp": now - timedelta(days=1)},
        TEST_SECRET,
        algorithm="HS256",
    )
    forged = jwt.encode(
        {"sub": user["id"], "iat": now, "exp": now + timedelta(days=1)},
        "a-different-secret-that-is-long-enough-too",
        algorithm="HS256",
    )
    for token in (expired, forged, "garbage"):
        response = _get_with_token(client, path, token)
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"


def test_token_for_deleted_account(client):
    now = datetime.now(tz=timezone.utc)
    token = jwt.encode(
        {"sub": "no-such-user", "iat": now, "exp": now + timedelta(days=1)},
        TEST_SECRET,
        algorithm="HS256",
    )
    assert _get_with_token(client, "/api/auth/me", token).status_code == 404


def test_logout_clears_cookie(client, register):
    register()
    response = client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"message": "Logged out"}
    cookie = response.headers["set-cookie"]
    assert cookie.startswith("token=")
    assert "Max-Age=0" in cookie
    assert client.get("/api/auth/me").status_code == 401


def test_malformed_json_body(client):
    response = client.post(
        "/api/auth/login",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400


def test_secure_cookie_in_production(tmp_path, monkeypatch):
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "prod.db"))
    monkeypatch.setenv("APP_ENV", "production")
    with TestClient(create_application(Settings())) as client:
        response = client.post(
            "/api/auth/register",
            json={"name": "Asha Rao", "email": "asha@example.com", "password": "secret123"},
        )
    assert response.status_code == 201
    assert "Secure" in response.headers["set-cookie"]
