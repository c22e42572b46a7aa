"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend
    api_base_url: str = Field(
        default="http://localhost:5000",
        description="Base URL of the backend serving poll data and boundary assets",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            msg = "api_base_url must use http or https"
            raise ValueError(msg)
        return v.rstrip("/")

    boundaries_path: str = Field(
        default="/michigan_county_boundaries.geojson",
        description="Path of the county boundary GeoJSON asset on the backend",
    )
    boundaries_file: str | None = Field(
        default=None,
        description="Local GeoJSON file with county boundaries (overrides boundaries_path when set)",
    )
    poll_data_path: str = Field(
        default="/api/poll-data",
        description="Path of the poll data endpoint on the backend",
    )
    request_timeout: float = Field(
        default=10.0,
        description="Backend request timeout in seconds",
        gt=0,
    )

    # County tinting
    winner_lookup_enabled: bool = Field(
        default=True,
        description="Look up the presidential winner of every county to tint the map",
    )
    winner_lookup_concurrency: int = Field(
        default=8,
        description="Maximum concurrent winner lookups",
        gt=0,
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )
    log_json: bool = Field(
        default=False,
        description="Write console logs as JSON lines",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins (must be explicitly configured)",
    )

    # Environment
    environment: str = Field(
        default="production",
        description="Deployment environment name (e.g. production, dev, staging)",
    )

    # API
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API version prefix",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
