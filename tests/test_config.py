"""
Tests for environment-driven settings
"""

import logging

import pytest

from livestockmart.core.config import Settings
from livestockmart.core.logging import PACKAGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in ("JWT_SECRET", "PORT", "HOST", "APP_ENV", "PASSWORD_HASH_ROUNDS", "CORS_ALLOW_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "config.db"))


def test_signing_secret_has_no_default():
    with pytest.raises(RuntimeError, match="JWT_SECRET"):
        Settings()


def test_defaults(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    settings = Settings()
    assert settings.port == 3000
    assert settings.host == "0.0.0.0"
    assert settings.password_hash_rounds == 10
    assert settings.cors_allow_origins == ["*"]
    assert not settings.is_production


def test_overrides(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("APP_ENV", "Production")
    monkeypatch.setenv("PASSWORD_HASH_ROUNDS", "12")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://shop.example, https://admin.example")
    settings = Settings()
    assert settings.port == 8080
    assert settings.is_production
    assert settings.password_hash_rounds == 12
    assert settings.cors_allow_origins == ["https://shop.example", "https://admin.example"]


@pytest.mark.parametrize("key, value", [("PORT", "eighty"), ("PASSWORD_HASH_ROUNDS", "8")])
def test_invalid_values(monkeypatch, key, value):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv(key, value)
    with pytest.raises(RuntimeError):
        Settings()


def test_log_level(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    assert Settings().log_level == "INFO"
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings().log_level == "DEBUG"
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(RuntimeError, match="LOG_LEVEL"):
        Settings()


def test_configure_logging_applies_level():
    root = logging.getLogger()
    package = logging.getLogger(PACKAGE_LOGGER)
    saved = root.level, package.level
    try:
        configure_logging("warning")
        assert package.level == logging.WARNING
        configure_logging("DEBUG")
        assert package.level == logging.DEBUG
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(saved[0])
        package.setLevel(saved[1])
