"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from apscheduler.triggers.cron import CronTrigger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify JWT bearer tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone (or UTC+HH:MM offset) used for stored timestamps",
    )
    enable_scheduler: bool = Field(
        default=True,
        description="Start the due-date reminder jobs together with the application",
    )
    upcoming_reminder_cron: str = Field(
        default="0 9 * * *",
        description="Crontab expression for the upcoming due-date sweep",
    )
    urgent_reminder_cron: str = Field(
        default="0 * * * *",
        description="Crontab expression for the urgent due-date sweep",
    )
    upcoming_horizon_days: int = Field(
        default=3,
        description="Tasks due within this many days receive an upcoming reminder",
        gt=0,
    )
    urgent_horizon_hours: int = Field(
        default=24,
        description="Tasks due within this many hours receive an urgent reminder",
        gt=0,
    )
    log_level: str = Field(default="INFO", description="Root log level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser (JSON list)",
    )

    @field_validator("upcoming_reminder_cron", "urgent_reminder_cron")
    @classmethod
    def _validate_crontab(cls, value: str) -> str:
        try:
            CronTrigger.from_crontab(value)
        except ValueError as exc:
            raise ValueError(f"Invalid crontab expression '{value}': {exc}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache and everything derived from it."""

    from tasket.utils.datetime import get_app_timezone

    get_settings.cache_clear()
    get_app_timezone.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
