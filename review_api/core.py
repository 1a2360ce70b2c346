"""Application configuration and settings management.

This module defines the application settings loaded from environment
variables and provides a helper for accessing the cached settings.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Attributes:
        APP_NAME: Title reported by the OpenAPI schema and the root endpoint.
        DATABASE_URL: Database connection string.
        SQL_ECHO: Echo every SQL statement issued by the engine.
        ALLOWED_ORIGINS: Allowed origins for CORS.
        LOG_LEVEL: Minimum level written by the log sinks.
        LOG_FILE: Optional path of a rotating log file.
        LOG_SERIALIZE: Write the log file as JSON lines instead of plain text.
    """

    APP_NAME: str = "Review API"
    DATABASE_URL: str = "sqlite:///./app.db"
    SQL_ECHO: bool = False
    ALLOWED_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None
    LOG_SERIALIZE: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="allow")


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    The settings object is cached to prevent reloading environment
    variables multiple times during application lifetime.
    """

    return Settings()
