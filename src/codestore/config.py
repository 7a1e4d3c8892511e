"""Configuration management using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Supports loading from .env files and environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Service configuration
    host: str = "0.0.0.0"
    port: int = 3000

    # Storage configuration
    content_dir: Path = Path("./uploads")
    metadata_dir: Path = Path("./data/metadata")
    persist_metadata: bool = True

    # Upload configuration
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, gt=0)
    auto_code_attempts: int = Field(default=20, ge=1)

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = False

    # CORS settings - stored as comma-separated string for env var compatibility
    cors_origins_str: str = Field(
        default="*",
        validation_alias="CORS_ALLOWED_ORIGINS",
    )

    @property
    def cors_allowed_origins(self) -> list[str]:
        """CORS allowed origins as a list."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def timestamp_dir(self) -> Path | None:
        """Directory for upload timestamp sidecars, or None when kept in memory only."""
        return self.metadata_dir if self.persist_metadata else None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
