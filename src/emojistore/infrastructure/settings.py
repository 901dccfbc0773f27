"""Application settings using Pydantic Settings for configuration management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from emojistore.domain.models import IndexEncoding, Size


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Emoji Store"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 5000
    cors_origins: list[str] = Field(default_factory=lambda: ["https://teams.microsoft.com"])
    max_upload_bytes: int = 1024 * 1024
    reconcile_on_startup: bool = False

    # Redis (hot index)
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout: float = 5.0

    # S3-compatible blob storage
    s3_endpoint: str | None = None
    s3_region: str = "us-east-1"
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None
    s3_use_ssl: bool = False
    s3_force_path_style: bool = True
    s3_bucket_prefix: str = "emojis"

    # Asset layout
    emoji_sizes: list[Size] = Field(default_factory=lambda: [Size.FULL])
    index_encoding: IndexEncoding = IndexEncoding.HEX
    sentinel_name: str = "slackbot"

    # Local cache in front of Redis
    local_cache_ttl_seconds: int = 300
    local_cache_maxsize: int = 10_000

    @computed_field
    @property
    def bucket_names(self) -> dict[Size, str]:
        """Bucket per enabled size; full size uses the bare prefix."""
        return {
            size: self.s3_bucket_prefix if size is Size.FULL else f"{self.s3_bucket_prefix}-{size.value}"
            for size in Size.ordered(self.emoji_sizes)
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
