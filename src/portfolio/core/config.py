from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Portfolio API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_timeout_seconds: float = 5.0  # connect and per-statement timeout
    run_migrations_on_startup: bool = False

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Media storage
    media_backend: Literal["local", "s3"] = "local"
    media_root: Path = Path("uploads")
    media_url_prefix: str = "/uploads"
    media_max_bytes: int = 2 * 1024 * 1024
    media_timeout_seconds: float = 5.0

    # S3-compatible storage (only used when media_backend == "s3")
    s3_bucket: str | None = None
    s3_endpoint_url: str | None = None
    s3_region: str = "us-east-1"
    s3_access_key: str | None = None
    s3_secret_key: str | None = None
    s3_public_base_url: str | None = None  # e.g. https://bucket.s3.amazonaws.com
    s3_key_prefix: str = "uploads"

    # Metrics
    enable_metrics: bool = True

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("DATABASE_URL must not be empty")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcard origins since credentials are allowed."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("media_url_prefix")
    @classmethod
    def validate_media_url_prefix(cls, v: str) -> str:
        v = "/" + v.strip("/")
        if v == "/":
            raise ValueError("MEDIA_URL_PREFIX must not be the site root")
        return v

    @model_validator(mode="after")
    def validate_s3_settings(self) -> "Settings":
        """The S3 backend needs a bucket and a public base URL to build references."""
        if self.media_backend == "s3":
            if not self.s3_bucket:
                raise ValueError("S3_BUCKET is required when MEDIA_BACKEND=s3")
            if not self.s3_public_base_url:
                raise ValueError("S3_PUBLIC_BASE_URL is required when MEDIA_BACKEND=s3")
            self.s3_public_base_url = self.s3_public_base_url.rstrip("/")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
