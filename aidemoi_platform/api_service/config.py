"""
Configuration management for the Aide Moi API
"""
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """API configuration loaded from environment variables"""

    # Application
    APP_NAME: str = "Aide Moi Backend API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "production"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./aidemoi.db"
    DB_ECHO: bool = False

    # JWT Configuration
    JWT_SECRET: str = "dev-secret-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN: str = "24h"
    REFRESH_TOKEN_EXPIRES_IN: str = "7d"

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    # Rate Limiting
    RATE_LIMIT: str = "100/minute"
    RATE_LIMIT_ENABLED: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() in ("development", "dev", "local")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()
