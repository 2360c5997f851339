from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Ticket Tracker"
    LOG_LEVEL: str = "INFO"

    DATA_DIR: Path = Field(default_factory=lambda: Path("data"))

    DB_URL: str = Field(default="sqlite:///./data/tracker.db", validation_alias="DATABASE_URL")

    # Token signing key and lifetime of issued bearer tokens.
    JWT_SECRET: str = "change-me"
    JWT_TTL_MIN: int = Field(default=60, ge=1)

    # Pepper mixed into every password before bcrypt sees it.
    HASH_SECRET: str = "change-me-too"
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)

    SESSION_COOKIE_NAME: str = "tracker_session"
    COOKIE_SECURE: bool = False

    ALLOWED_ORIGINS: list[str] = Field(default_factory=list)

    @property
    def is_sqlite(self) -> bool:
        return self.DB_URL.startswith("sqlite")

    @property
    def is_memory_sqlite(self) -> bool:
        return self.DB_URL in ("sqlite://", "sqlite:///:memory:")

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_allowed_origins(cls, value: Any) -> list[str]:
        if value in (None, "", []):
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, Iterable):
            return [str(item).strip() for item in value if str(item).strip()]
        raise TypeError("ALLOWED_ORIGINS must be a comma separated string or list")

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    settings = AppSettings()
    if settings.is_sqlite and not settings.is_memory_sqlite:
        settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
    return settings


settings = get_settings()
