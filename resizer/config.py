from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from resizer.constants import (
    ALLOWED_MIME_TYPES,
    DEFAULT_CACHE_CONTROL,
    NO_CACHE_CONTROL,
    PASSTHROUGH_MIME_TYPES,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── AWS ───────────────────────────────────────────────────────────────────
    s3_bucket: str = Field(
        default="",
        validation_alias=AliasChoices("s3_bucket", "bucket"),
    )
    aws_region: str = "us-east-1"
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    s3_endpoint_url: str = ""  # e.g. http://localhost:4566 for localstack

    # ── Caching ───────────────────────────────────────────────────────────────
    cache_control: str = DEFAULT_CACHE_CONTROL
    no_cache_control: str = NO_CACHE_CONTROL

    # ── Media types ───────────────────────────────────────────────────────────
    allowed_mime_types: list[str] = list(ALLOWED_MIME_TYPES)
    passthrough_mime_types: list[str] = list(PASSTHROUGH_MIME_TYPES)

    # ── Encoding ──────────────────────────────────────────────────────────────
    jpeg_quality: int = Field(default=80, ge=1, le=100)

    # ── Runtime ───────────────────────────────────────────────────────────────
    log_level: str = "INFO"
    cors_origins: str = "*"

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def cors_origins_list(self) -> list[str]:
        return [x.strip() for x in self.cors_origins.split(",") if x.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
