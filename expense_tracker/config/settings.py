"""
Configuration Management for Smart Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every knob lives under the EXPENSE_TRACKER_ prefix and can also come
from a local .env file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where transactions are persisted and exported."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_file: Path = Field(
        default=Path("transactions.csv"),
        description="Flat file holding one transaction per line"
    )
    export_dir: Path = Field(
        default=Path("exports"),
        description="Default directory for exported copies of the store"
    )
    file_encoding: str = Field(
        default="utf-8",
        description="Text encoding used for the data file"
    )


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum level for local log output"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON (False gives console-friendly output)"
    )
    audit_history_size: int = Field(
        default=200,
        ge=0,
        le=10000,
        description="How many recent audit events to keep in memory"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept level names the logging module knows."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class ChartSettings(BaseSettings):
    """Pie chart rendering configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_CHART_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    width_inches: float = Field(
        default=7.0,
        gt=0,
        description="Figure width"
    )
    height_inches: float = Field(
        default=4.5,
        gt=0,
        description="Figure height"
    )
    dpi: int = Field(
        default=100,
        ge=50,
        le=600,
        description="Figure resolution"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Entry form limits
    max_amount: float = Field(
        default=10000000.0,
        gt=0,
        description="Amounts above this are flagged for review (never rejected)"
    )
    currency_symbol: str = Field(
        default="",
        max_length=5,
        description="Prefix shown before amounts in the UI"
    )


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
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()

    @property
    def chart(self) -> ChartSettings:
        return ChartSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the ones that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "logging", "chart", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
