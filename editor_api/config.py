"""Application configuration with Pydantic Settings.

This module provides centralized configuration management using pydantic-settings.
Settings are loaded from environment variables and .env files.

Examples:
    >>> from editor_api.config import get_settings
    >>> settings = get_settings()
    >>> settings.PORT
    3001
    >>> settings.max_file_size_mb
    10.0

Tests:
    - tests/unit/test_config.py::TestSettings
"""

import logging
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables and .env file.

    Attributes:
        HOST: Interface the server binds to
        PORT: Listening port
        CORS_ORIGIN: Origin allowed to call the API from a browser
        MAX_FILE_SIZE: Maximum accepted upload size in bytes
        MAX_FILES: Maximum number of files in one multipart request
        STORAGE_ROOT: Root directory for stored assets
        ENVIRONMENT: Deployment environment
        DEBUG: Enables interactive API docs
        LOG_LEVEL: Root logging level
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Server
    HOST: str = Field(
        default="0.0.0.0",
        description="Interface the server binds to",
    )
    PORT: int = Field(
        default=3001,
        description="Listening port",
        ge=1,
        le=65535,
    )
    CORS_ORIGIN: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origin for the editor frontend",
    )

    # Uploads
    MAX_FILE_SIZE: int = Field(
        default=DEFAULT_MAX_FILE_SIZE,
        description="Maximum upload size in bytes",
        gt=0,
    )
    MAX_FILES: int = Field(
        default=5,
        description="Maximum number of files per upload request",
        ge=1,
    )

    # Storage
    STORAGE_ROOT: str = Field(
        default="./storage",
        description="Root directory for fonts, images and rendered designs",
    )

    # Application Settings
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    DEBUG: bool = Field(
        default=True,
        description="Enable debug mode",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize the logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {v!r}")
        return level

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    @property
    def max_file_size_mb(self) -> float:
        """Maximum upload size in megabytes, for messages."""
        return self.MAX_FILE_SIZE / 1024 / 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: The application settings.
    """
    return Settings()
