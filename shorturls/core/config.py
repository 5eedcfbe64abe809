"""Application configuration module.

This module contains settings for the URL shortener application,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Set up basic logger for config module
logger = logging.getLogger(__name__)

# Sync driver prefixes rewritten to their async counterparts
ASYNC_DRIVERS = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here. ``DATABASE_URL`` has no default: the service refuses
    to start without a database.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "Short URLs"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Short links with click counting and a small management page"
    DEBUG: bool = False

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # API settings
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = []  # JSON list, e.g. ["https://example.com"]

    # Database settings
    DATABASE_URL: str = Field(
        ...,
        validation_alias=AliasChoices("DATABASE_URL", "MONGO_URI"),
        description="SQL database connection string",
    )
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False

    # Short code generation
    CODE_LENGTH: int = Field(default=6, ge=6, le=8)  # Length of generated codes
    CODE_MAX_LENGTH: int = 8  # Generated codes grow up to this length on collisions
    CODE_GENERATION_ATTEMPTS: int = 5  # Attempts per length before growing

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{line} | {message}"
    LOG_JSON: bool = True
    LOG_FILE_ENABLED: bool = True
    REQUEST_LOGGING_ENABLED: bool = True  # Enable request logging middleware
    CLICK_LOGGING_ENABLED: bool = True  # Write per-redirect access log files

    @field_validator("DATABASE_URL")
    def use_async_driver(cls, v: str) -> str:
        """Rewrite plain postgres/sqlite URLs to the async driver the engine needs."""
        v = v.strip()
        if not v:
            raise ValueError("DATABASE_URL must not be empty")
        if v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("DATABASE_URL must be a SQL database URL (postgresql:// or sqlite://)")
        for prefix, replacement in ASYNC_DRIVERS.items():
            if v.startswith(prefix):
                return replacement + v[len(prefix):]
        return v

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: Any) -> str:
        return str(v).upper()


# Create a singleton instance of the settings
settings = Settings()
