"""
Application configuration using Pydantic BaseSettings.
Loads environment variables and provides typed configuration.
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project metadata
    PROJECT_NAME: str = "EduCard Admin Gateway"
    VERSION: str = "1.0.0"
    API_V1_PREFIX: str = "/api/v1"

    # Upstream organization API
    UPSTREAM_API_BASE_URL: str = "http://localhost:8000/api"
    UPSTREAM_API_TOKEN: str = ""
    UPSTREAM_TIMEOUT: int = 30
    UPSTREAM_MAX_RETRIES: int = 3
    UPSTREAM_RETRY_DELAY: float = 1.0

    # Query cache (seconds)
    CACHE_SHORT_STALE_TIME: int = 5 * 60
    CACHE_LONG_STALE_TIME: int = 30 * 60
    CACHE_TIME: int = 60 * 60

    # Pagination
    DEFAULT_PAGE_SIZE: int = 25
    MAX_PAGE_SIZE: int = 100
    CALENDAR_PAGE_SIZE: int = 50

    # Bulk upload
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5 MB

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60

    # Logging
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
