"""
Configuration Management for Budget Bot

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see what external dependencies exist and
ensures all required configuration is validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from budget_bot.models.locale import Language


class ConfigurationError(Exception):
    """Missing or malformed configuration. Fatal at startup."""
    pass


class TelegramSettings(BaseSettings):
    """Telegram bot transport configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TELEGRAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    bot_token: str = Field(
        ...,
        description="Token issued by BotFather"
    )
    poll_timeout: int = Field(
        default=60,
        ge=1,
        le=600,
        description="Long polling timeout in seconds"
    )


class GoogleSheetsSettings(BaseSettings):
    """Google Sheets storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_SHEETS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    credentials_path: str = Field(
        ...,
        description="Path to Google service account credentials JSON"
    )
    spreadsheet_id: str = Field(
        ...,
        min_length=1,
        description="ID of the budget spreadsheet"
    )

    @field_validator('credentials_path')
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """Warn if credentials file doesn't exist (but don't fail - might be mounted later)."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Google credentials file not found at {v}. "
                "Make sure it exists before running the bot."
            )
        return v


class SheetLayoutSettings(BaseSettings):
    """
    Where things live inside one monthly sheet.

    The defaults describe the budget template the bot was built for:
    one row per day starting at row 2, categories listed from row 22.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHEET_LAYOUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    daily_expenses_column: str = Field(
        default="I",
        description="Column holding the running total of each day's expenses"
    )
    category_range: str = Field(
        default="A22:A52",
        description="Range listing the category names, one per row"
    )
    category_column: str = Field(
        default="J",
        description="Column holding the running total of each category"
    )
    budget_column: str = Field(
        default="K",
        description="Column holding the remaining budget of each day"
    )
    header_rows: int = Field(
        default=1,
        ge=0,
        description="Rows above the first day of the month"
    )
    category_first_row: Optional[int] = Field(
        default=None,
        description="Row of the first category; defaults to the start of category_range"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_language: Language = Field(
        default=Language.RU,
        description="Language for users who never picked one"
    )
    sheet_language: Language = Field(
        default=Language.RU,
        description="Language of the month names in sheet tab titles"
    )
    sheet_name_style: Literal["month_name", "numeric"] = Field(
        default="month_name",
        description="'month_name' -> 'Октябрь 2026', 'numeric' -> '2026-10'"
    )
    timezone: str = Field(
        default="UTC",
        description="IANA time zone used to decide what 'today' is"
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for the stdlib root logger"
    )

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {v}")
        return v

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


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

    # Sub-settings are loaded lazily to allow partial configuration

    @property
    def telegram(self) -> TelegramSettings:
        return TelegramSettings()

    @property
    def google_sheets(self) -> GoogleSheetsSettings:
        return GoogleSheetsSettings()

    @property
    def sheet_layout(self) -> SheetLayoutSettings:
        return SheetLayoutSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


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

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the ones that failed.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("telegram", "google_sheets", "sheet_layout", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
