"""
Configuration Utility - Environment Variables Management

Centralized configuration loading from .env files using pydantic-settings.
Type-safe access to all environment variables with validation.

Usage:
    from utils.config import settings

    habits_base = settings.HABITS_API_BASE
    db_path = settings.SQLITE_PATH
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # External data providers
    HABITS_API_BASE: str = Field(default="https://habits-microservice-marcorob.c9users.io")
    HABITS_API_PATH: str = Field(default="/habits")
    TASKS_API_BASE: str = Field(default="http://10.43.88.167:8080")
    TASKS_API_PATH: str = Field(default="/Task/tasks")
    API_TIMEOUT: float = Field(default=30.0)

    # Database Configuration
    SQLITE_PATH: str = Field(default="/app/data/db/arqui.db")

    # Snapshot Scheduler Configuration
    REPORT_SCHEDULE_CRON: str = Field(default="0 * * * *")

    # Backend API Configuration
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8001)

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="text")

    # Application Metadata
    ENVIRONMENT: str = Field(default="production")
    APP_NAME: str = Field(default="admin-report")
    APP_VERSION: str = Field(default="0.1.0")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Singleton Settings instance
    """
    return Settings()


# Global settings instance
settings = get_settings()
