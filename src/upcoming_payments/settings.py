"""Centralized configuration using pydantic-settings.

All configuration is loaded from environment variables and .env files.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Upcoming payments settings.

    All settings can be overridden via environment variables prefixed with
    ``UPCOMING_PAYMENTS_``. For nested settings, use double underscore:
    UPCOMING_PAYMENTS_OBSERVABILITY__LOG_FORMAT=text
    """

    model_config = SettingsConfigDict(
        env_prefix="UPCOMING_PAYMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )

    # ============================================================
    # Formatting
    # ============================================================

    locale: str | None = Field(
        None,
        description="Locale override; when unset the process locale is read at format time",
    )
    currency: str = Field("USD", description="ISO 4217 currency code used for amounts")

    # ============================================================
    # Navigation
    # ============================================================

    record_object_type: str = Field(
        "Billing_Schedule", description="Object type sent with row navigation requests"
    )

    # ============================================================
    # Observability
    # ============================================================

    class ObservabilitySettings(BaseModel):
        """Logging configuration."""

        log_level: LogLevel = Field(LogLevel.INFO, description="Log level")
        log_format: str = Field("json", description="Log format (json or text)")

    observability: ObservabilitySettings = ObservabilitySettings()  # type: ignore[call-arg]

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Normalize currency code."""
        return v.strip().upper()


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get global settings instance (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()  # type: ignore
    return _settings


def reset_settings() -> None:
    """Reset settings (mainly for testing)."""
    global _settings
    _settings = None
