"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.

DATABASE_URL and SECRET_KEY have no defaults: when either is missing the
settings object cannot be built and the process refuses to start.
"""

from functools import lru_cache
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str

    # Security
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_hours: int = 24
    auth_recheck_active: bool = False  # look up the credential on every request

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # API Settings
    api_prefix: str = "/api"
    project_name: str = "Ferry Operator Network API"
    version: str = "1.0.0"

    # CORS (JSON list in the environment)
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",  # Vite default
    ]

    @field_validator("database_url", "secret_key")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("access_token_expire_hours")
    @classmethod
    def _positive_expiry(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive number of hours")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
