import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

MIN_PASSWORD_HASH_ROUNDS = 10


class Settings:
    """Centralised application configuration sourced from environment variables."""

    def __init__(self) -> None:
        load_dotenv()
        self.jwt_secret = self._get("JWT_SECRET")
        self.database_path = Path(os.getenv("DATABASE_PATH", "data/livestockmart.db")).resolve()
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = self._get_int("PORT", default=3000)
        self.environment = os.getenv("APP_ENV", "development").strip().lower()
        self.password_hash_rounds = self._get_int(
            "PASSWORD_HASH_ROUNDS", default=MIN_PASSWORD_HASH_ROUNDS
        )
        if self.password_hash_rounds < MIN_PASSWORD_HASH_ROUNDS:
            raise RuntimeError(
                f"PASSWORD_HASH_ROUNDS must be at least {MIN_PASSWORD_HASH_ROUNDS}"
            )
        self.log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise RuntimeError(f"LOG_LEVEL must be a logging level name, got {self.log_level!r}")
        origins = os.getenv("CORS_ALLOW_ORIGINS")
        if origins:
            self.cors_allow_origins = [item.strip() for item in origins.split(",") if item.strip()]
        else:
            self.cors_allow_origins = ["*"]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @staticmethod
    def _get(key: str) -> str:
        value = os.getenv(key)
        if not value:
            raise RuntimeError(f"Missing required environment variable: {key}")
        return value

    @staticmethod
    def _get_int(key: str, default: Optional[int] = None) -> int:
        value = os.getenv(key)
        if value is None:
            if default is None:
                raise RuntimeError(f"Missing required environment variable: {key}")
            return default
        try:
            return int(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be an integer") from exc
