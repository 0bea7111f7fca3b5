"""
Application configuration.
Values loaded from environment variables or a local .env file.
"""
from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Service identity (shown on the index and in the task list)
    SERVICE_NAME: str = "RUNSTR DVM"
    SERVICE_DESCRIPTION: str = "Running-related notes and activity analysis"
    SERVICE_VERSION: str = "1.0.0"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    # Bounded collections
    MAX_FEED_SIZE: int = 100
    MAX_TEMPLATES_SIZE: int = 100
    MAX_RECORDS_SIZE: int = 100

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
