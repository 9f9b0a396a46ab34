"""Application configuration."""

from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Hosted document store REST endpoint (Firestore v1)
DEFAULT_FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Workforce API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Directory store
    store_backend: Literal["memory", "firestore"] = "memory"
    firestore_project_id: str = ""
    firestore_api_key: str = ""
    firestore_database: str = "(default)"
    firestore_base_url: str = DEFAULT_FIRESTORE_BASE_URL
    store_timeout_seconds: float = Field(default=10.0, gt=0)

    # Workspace cache (milliseconds)
    workspace_cache_ttl_ms: int = Field(default=60_000, ge=0)

    # Dashboard / workspace slicing
    dashboard_top_projects: int = Field(default=3, ge=1)
    activity_feed_limit: int = Field(default=3, ge=1)
    workspace_list_limit: int = Field(default=8, ge=1)
    team_list_limit: int = Field(default=10, ge=1)

    # Calendar-day and date labels are computed in this zone
    display_timezone: str = "UTC"

    # CORS settings
    cors_origins: str = "http://localhost:3000"  # Comma-separated list

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for consistency requirements."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose detailed error messages."
            )

        try:
            ZoneInfo(self.display_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"DISPLAY_TIMEZONE must be an IANA zone name, got '{self.display_timezone}'"
            )

        if self.environment == "production" and self.store_backend == "memory":
            raise ValueError(
                "STORE_BACKEND=memory is not allowed in production; "
                "configure the firestore backend"
            )

        return self

    @property
    def tz(self) -> ZoneInfo:
        """Get the display timezone."""
        return ZoneInfo(self.display_timezone)

    @property
    def firestore_documents_url(self) -> str:
        """Get the documents root URL for the configured project and database."""
        base = self.firestore_base_url.rstrip("/")
        return (
            f"{base}/projects/{self.firestore_project_id}"
            f"/databases/{self.firestore_database}/documents"
        )

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
