"""Application configuration and environment management."""
from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

load_dotenv()

logger = logging.getLogger("worldclock.config")

DEVICE_TIMEZONE_ENV_VARS: tuple[str, ...] = ("DEVICE_TIMEZONE", "TZ", "LOCAL_TIMEZONE")
FALLBACK_TIMEZONE = "UTC"


def _is_known_timezone(value: str) -> bool:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


def detect_device_timezone() -> str:
    """Resolve the device zone from the environment, then the OS, then UTC.

    Called on every lookup; the device zone may change while the process runs.
    """
    for env_name in DEVICE_TIMEZONE_ENV_VARS:
        value = (os.environ.get(env_name) or "").strip().lstrip(":")
        if value and _is_known_timezone(value):
            return value

    try:
        import tzlocal

        local_name = tzlocal.get_localzone_name()
    except Exception:
        logger.debug("tzlocal could not resolve the local zone", exc_info=True)
        return FALLBACK_TIMEZONE
    if local_name and _is_known_timezone(local_name):
        return local_name
    return FALLBACK_TIMEZONE


class Settings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    app_name: str = Field(default="World Clocks", description="Human readable app name")
    environment: str = Field(default="development", description="Runtime environment name")

    database_url: str = Field(
        default="sqlite+aiosqlite:///data/worldclock.db",
        description="SQLAlchemy connection string",
    )
    storage_key: str = Field(
        default="@worldclocks",
        description="Key holding the JSON array of saved zone ids",
    )

    refresh_interval_seconds: int = Field(
        default=60,
        ge=1,
        description="How often clients should re-render the clock board",
    )
    minus_sign: str = Field(
        default="−",
        description="Glyph used for negative offset labels",
    )
    search_limit: int = Field(default=50, ge=1, description="Default number of search results")
    log_level: str = Field(default="INFO", description="Root log level for the worldclock logger")

    @field_validator("storage_key")
    @classmethod
    def _validate_storage_key(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Storage key cannot be empty")
        return value

    @field_validator("minus_sign")
    @classmethod
    def _validate_minus_sign(cls, value: str) -> str:
        if value not in {"−", "-"}:
            raise ValueError("Minus sign must be '−' or '-'")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        value_upper = value.upper()
        if value_upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level '{value}'")
        return value_upper

    def database_path(self) -> Path:
        if self.database_url.startswith("sqlite"):
            if "///" in self.database_url:
                path = self.database_url.split("///", 1)[1]
            else:
                path = self.database_url.split(":", 1)[-1]
            return Path(path)
        raise ValueError("Database path only available for sqlite URLs")


_ENV_MAPPING = {
    "APP_NAME": "app_name",
    "ENVIRONMENT": "environment",
    "DATABASE_URL": "database_url",
    "STORAGE_KEY": "storage_key",
    "REFRESH_INTERVAL_SECONDS": "refresh_interval_seconds",
    "MINUS_SIGN": "minus_sign",
    "SEARCH_LIMIT": "search_limit",
    "LOG_LEVEL": "log_level",
}


def _load_settings() -> Settings:
    data: dict[str, object] = {}
    for env_name, field_name in _ENV_MAPPING.items():
        if env_name not in os.environ:
            continue
        data[field_name] = os.environ[env_name]
    return Settings(**data)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return _load_settings()
