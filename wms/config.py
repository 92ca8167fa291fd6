"""
Configuration Management Module

Configures application parameters via environment variables or .env file.
Supports SQLite (default) and PostgreSQL databases.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # Application Config
    APP_NAME: str = "OpenWMS"
    DEBUG: bool = False

    # Database Config
    # Supports "sqlite" or "postgresql"
    DATABASE_TYPE: Literal["sqlite", "postgresql"] = "sqlite"
    # SQLite default database path, PostgreSQL requires full connection string
    DATABASE_URL: str = "sqlite+aiosqlite:///./openwms.db"

    # Embedded Database Config
    # In-memory database started for unit and integration tests
    EMBEDDED_DB_URL: str = "sqlite+aiosqlite:///:memory:"
    EMBEDDED_DB_USERNAME: str | None = None
    EMBEDDED_DB_PASSWORD: str | None = None
    # When disabled, start/stop are no-ops
    EMBEDDED_DB_ENABLED: bool = True

    # Repository Config
    # Default not-found policy for find_by_id: return None (False) or raise NotFoundError (True)
    REPOSITORY_RAISE_ON_MISSING: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get application configuration (Singleton)

    Uses lru_cache to ensure configuration is loaded only once.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
