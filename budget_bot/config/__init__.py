"""Configuration package."""

from budget_bot.config.settings import (
    AppSettings,
    ConfigurationError,
    GoogleSheetsSettings,
    Settings,
    SheetLayoutSettings,
    TelegramSettings,
    get_settings,
    validate_all_settings,
)
from budget_bot.config.layout import SheetLayout

__all__ = [
    "AppSettings",
    "ConfigurationError",
    "GoogleSheetsSettings",
    "Settings",
    "SheetLayout",
    "SheetLayoutSettings",
    "TelegramSettings",
    "get_settings",
    "validate_all_settings",
]
