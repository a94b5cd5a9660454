"""
Configuration management for the File Service.
Uses pydantic-settings with a JSON settings file and environment overrides.
"""

import enum
import os
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_SETTINGS_FILE = "appsettings.json"


class DbType(str, enum.Enum):
    """Supported relational database backends."""
    MICROSOFT = "microsoft"
    POSTGRESQL = "postgresql"


class Settings(BaseSettings):
    """
    Application settings.

    Values are read once at startup from (highest priority first) init
    arguments, environment variables, `.env` and the JSON settings file.
    The resulting object is frozen.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # API Settings
    PROJECT_NAME: str = "File Service"
    DEBUG: bool = False

    # Database
    CONNECTION_STRING: str = (
        "Host=localhost;Database=druware;Username=postgres;Password=postgres"
    )
    DB_TYPE: DbType = DbType.POSTGRESQL
    MSSQL_ODBC_DRIVER: str = "ODBC Driver 18 for SQL Server"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    RUN_MIGRATIONS: bool = True

    # File Upload Limits (None disables the check)
    MAX_UPLOAD_SIZE: int | None = None

    # Hosting
    HTTPS_REDIRECT: bool = False
    FORWARDED_ALLOW_IPS: str = "127.0.0.1"

    # Authentication
    AUTH_JWKS_URL: str = "http://localhost:8080/.well-known/jwks.json"
    AUTH_ISSUER: str = "https://auth.example.com"
    AUTH_AUDIENCE: str = "file-service"

    # JWKS Cache TTL in seconds
    JWKS_CACHE_TTL: int = 3600  # 1 hour

    # Development Mode - bypasses JWT validation for local testing
    DEV_MODE: bool = False
    DEV_USER_ID: str = "dev-user-001"
    DEV_USER_EMAIL: str = "developer@localhost"
    DEV_USER_ROLES: list[str] = ["Editor"]

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("DB_TYPE", mode="before")
    @classmethod
    def normalize_db_type(cls, v):
        """Accept any casing, e.g. "PostgreSql" or "Microsoft"."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        json_file = os.environ.get("SETTINGS_FILE", DEFAULT_SETTINGS_FILE)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls, json_file=json_file),
            file_secret_settings,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
