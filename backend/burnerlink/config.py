"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every tunable limit of the relay comes from here (never hardcoded in routes)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults reproduce the reference behaviour: 20s offline timeout, 10 min free
      sessions, 5 free images per 24h, 20 MiB request ceiling
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = Field(4000, ge=1, le=65535)
    max_request_bytes: int = Field(20 * 1024 * 1024, gt=0)

    # Session lifecycle
    offline_timeout_seconds: float = Field(20.0, gt=0)
    free_session_lifetime_seconds: float = Field(600.0, gt=0)

    # Device quota
    free_daily_image_quota: int = Field(5, ge=0)
    quota_window_hours: float = Field(24.0, gt=0)
    pro_device_ids: list[str] = []

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @property
    def offline_timeout(self) -> timedelta:
        return timedelta(seconds=self.offline_timeout_seconds)

    @property
    def free_session_lifetime(self) -> timedelta:
        return timedelta(seconds=self.free_session_lifetime_seconds)

    @property
    def quota_window(self) -> timedelta:
        return timedelta(hours=self.quota_window_hours)


@lru_cache
def get_settings() -> Settings:
    return Settings()
