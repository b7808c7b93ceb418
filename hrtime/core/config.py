"""
Configuration settings for the application.
"""

import os
from typing import List
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings."""
    # Application settings
    APP_NAME: str = "HR Timesheet Portal API"
    DEBUG: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "t")

    # Server settings
    HOST: str = os.getenv("HOST", "localhost")
    PORT: int = int(os.getenv("PORT", "7780"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    # Upstream HR REST API
    UPSTREAM_API_URL: str = os.getenv("UPSTREAM_API_URL", "http://localhost:8081")
    UPSTREAM_TIMEOUT_SECONDS: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "15"))

    # Sessions - empty string keeps sessions in memory only
    SESSION_FILE: str = os.getenv("SESSION_FILE", "")

    # Timesheet submission bounds
    MIN_DAY_HOURS: float = 0.5
    MAX_DAY_HOURS: float = 24.0

    # Password Settings
    PASSWORD_MIN_LENGTH: int = 6

    class Config:
        """Pydantic config."""
        env_file = ".env"
        extra = "ignore"


# Create a settings object that will be imported by other modules
settings = Settings()
