"""
Configuration Management for fincalc

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The category vocabulary is NOT configuration: it is fixed data shared by
every deployment (see fincalc.constants.categories). Only presentation
and logging preferences can be tuned.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fincalc.constants.categories import SUPPORTED_LOCALES
from fincalc.constants.enums import Period


class LedgerSettings(BaseSettings):
    """Ledger engine and session preferences."""

    model_config = SettingsConfigDict(
        env_prefix="FINCALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_period: Period = Field(
        default=Period.MONTH,
        description="Window selected when a session starts"
    )
    locale: str = Field(
        default="en",
        description="Locale for category labels and user-facing messages"
    )
    currency: str = Field(
        default="RUB",
        min_length=3,
        max_length=3,
        description="ISO 4217 code used when formatting amounts"
    )

    # Validation thresholds
    large_amount_warning: Decimal = Field(
        default=Decimal("10000000"),
        gt=0,
        description="Amounts above this are accepted but flagged as unusual"
    )

    @field_validator('locale')
    @classmethod
    def validate_locale(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in SUPPORTED_LOCALES:
            raise ValueError(f"Unsupported locale: {v}. Supported: {SUPPORTED_LOCALES}")
        return v

    @field_validator('currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.strip().upper()


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FINCALC_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Standard logging level name"
    )
    json_output: bool = Field(
        default=True,
        description="Render log lines as JSON (console renderer otherwise)"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<setting_name>_error" entry for every failure.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.ledger
        results["ledger"] = True
    except ValidationError as e:
        results["ledger"] = False
        results["ledger_error"] = str(e)

    try:
        _ = settings.logging
        results["logging"] = True
    except ValidationError as e:
        results["logging"] = False
        results["logging_error"] = str(e)

    return results
