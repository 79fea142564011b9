"""Application configuration using Pydantic Settings."""
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings (environment variables or .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = Field("Photo Proofing API")
    ENVIRONMENT: str = Field("development")
    DEBUG: bool = Field(False)
    API_V1_PREFIX: str = Field("/api/v1")
    LOG_LEVEL: str = Field("INFO")

    # Database
    DATABASE_URL: str = Field("sqlite:///./proofing.db")
    DB_POOL_SIZE: int = Field(10, ge=1)
    DB_MAX_OVERFLOW: int = Field(10, ge=0)
    DB_ECHO: bool = Field(False)

    # Auth (tokens are issued elsewhere, only verified here)
    JWT_SECRET_KEY: str = Field(...)
    JWT_ALGORITHM: str = Field("HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60 * 24)

    # CORS, comma separated
    CORS_ORIGINS: str = Field("http://localhost:5173")

    # Notifications / live channel
    NOTIFICATIONS_PAGE_SIZE: int = Field(50, ge=1, le=500)
    WS_PING_INTERVAL_SECONDS: float = Field(60.0, gt=0)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid LOG_LEVEL '{v}'")
        return upper

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
