"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSyncSettings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="CATALOGSYNC_",
    )

    # Metadata resolution
    metadata_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Fetch attempts per metadata URI before falling back",
    )
    metadata_retry_backoff: float = Field(
        default=1.0,
        ge=0.0,
        description="Seconds to wait after attempt i, multiplied by i",
    )
    metadata_timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="HTTP timeout for a single metadata fetch in seconds",
    )

    # Pacing
    pace_interval: float = Field(
        default=0.5,
        ge=0.0,
        description="Minimum seconds between successive metadata fetches",
    )

    # Content addressing
    ipfs_gateway_url: str = Field(
        default="https://gateway.pinata.cloud/ipfs/",
        description="HTTP gateway used for ipfs:// URIs and pinned content",
    )

    # Pinning service
    pinning_url: str = Field(
        default="https://api.pinata.cloud",
        description="Pinning service base URL",
    )
    pinata_api_key: str | None = Field(
        default=None,
        description="Pinning service API key",
    )
    pinata_secret_api_key: str | None = Field(
        default=None,
        description="Pinning service secret key",
    )
    listing_verify_delay: float = Field(
        default=2.0,
        ge=0.0,
        description="Seconds to wait for pinned metadata to propagate before minting",
    )

    # App settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Allowed CORS origins for the HTTP API",
    )


@lru_cache
def get_settings() -> CatalogSyncSettings:
    """Get cached settings instance."""
    return CatalogSyncSettings()
