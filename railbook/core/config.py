"""
Client configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Railbook"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"

    # Railway API
    API_BASE_URL: str = "http://localhost:8000"
    API_PREFIX: str = "/api"
    REQUEST_TIMEOUT: float = 10.0

    # Session persistence
    SESSION_BACKEND: str = "file"  # file, memory, redis
    SESSION_FILE: str = "~/.railbook/session.json"
    SESSION_NAMESPACE: str = "railbook"

    # Redis (only used by the redis session backend)
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_SESSION_TTL: int = 86400  # 24 hours

    # Form rules
    MIN_PASSWORD_LENGTH: int = 6
    RECENT_BOOKINGS_LIMIT: int = 5

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
