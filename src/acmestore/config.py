"""Configuration management for acmestore using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from acmestore.storage.keys import normalize_prefix


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables are prefixed with ACMESTORE_ (e.g., ACMESTORE_BUCKET).
    """

    model_config = SettingsConfigDict(
        env_prefix="ACMESTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend
    backend: Literal["s3", "memory"] = Field(
        default="s3",
        description="Object store backend",
    )
    bucket: str = Field(
        default="",
        description="Bucket holding account key and certificates",
    )
    prefix: str = Field(
        default="",
        description="Key prefix inside the bucket (a trailing '/' is added)",
    )

    # S3 client
    region: str | None = Field(default=None, description="S3 region name")
    endpoint_url: str | None = Field(
        default=None,
        description="Custom S3 endpoint (MinIO, Ceph, ...); None uses AWS",
    )
    access_key_id: str | None = Field(
        default=None,
        description="Access key ID (falls back to the boto3 credential chain)",
    )
    secret_access_key: str | None = Field(
        default=None,
        description="Secret access key (falls back to the boto3 credential chain)",
    )
    list_page_size: int = Field(
        default=1000,
        gt=0,
        description="Maximum keys requested per list call",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format",
    )

    @field_validator("prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Ensure a non-empty prefix ends with exactly one separator."""
        return normalize_prefix(v)

    @field_validator("region", "endpoint_url", "access_key_id", "secret_access_key", mode="before")
    @classmethod
    def empty_as_none(cls, v: str | None) -> str | None:
        """Treat empty strings from the environment as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
