"""
Pytest configuration for LivestockMart tests
"""

import pytest
from fastapi.testclient import TestClient

from livestockmart.application.services.auth_service import AuthService
from livestockmart.application.services.livestock_service import LivestockService
from livestockmart.application.services.order_service import OrderService
from livestockmart.application.services.user_state_service import UserStateService
from livestockmart.core.app_factory import create_application
from livestockmart.core.config import Settings
from livestockmart.infrastructure.persistence.sqlite import SQLitePersistence
from livestockmart.infrastructure.security.passwords import BcryptPasswordHasher
from livestockmart.infrastructure.security.tokens import JwtTokenSigner

TEST_SECRET = "test-signing-secret-with-enough-bytes-for-hs256"

VALID_ADDRESS = {
    "name": "Asha Rao",
    "phone": "9876543210",
    "line1": "12 Market Road",
    "city": "Pune",
    "state": "Maharashtra",
    "pincode": "411001",
}


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Settings backed by a throwaway SQLite file"""
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "livestockmart.db"))
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.delenv("PASSWORD_HASH_ROUNDS", raising=False)
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    return Settings()


@pytest.fixture
def client(settings):
    """Test client with the application lifespan running"""
    with TestClient(create_application(settings)) as test_client:
        yield test_client


@pytest.fixture
def persistence(tmp_path):
    store = SQLitePersistence(tmp_path / "unit.db")
    yield store
    store.close()


@pytest.fixture
def auth_service(persistence):
    return AuthService(
        users=persistence,
        password_hasher=BcryptPasswordHasher(rounds=10),
        token_signer=JwtTokenSigner(TEST_SECRET),
    )


@pytest.fixture
def user_state_service(persistence):
    return UserStateService(persistence, persistence, persistence)


@pytest.fixture
def livestock_service(persistence):
    return LivestockService(persistence)


@pytest.fixture
def order_service(persistence):
    return OrderService(persistence)


@pytest.fixture
def register(client):
    """Register an account through the API; the client keeps its session cookie"""

    def _register(name="Asha Rao", email="asha@example.com", password="secret123"):
        response = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()["user"]

    return _register


@pytest.fixture
def create_livestock(client):
    def _create(**overrides):
        payload = {"name": "Sojat Goat", "type": "Goat", "breed": "Sojat", "age": 2, "price": 15000}
        payload.update(overrides)
        response = client.post("/api/livestock", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
