"""
Tests for settings and sheet layout validation.
"""

import pytest

from budget_bot.config import (
    AppSettings,
    ConfigurationError,
    SheetLayout,
    SheetLayoutSettings,
)
from budget_bot.config.layout import range_start_row
from budget_bot.models import Language


def layout_settings(**overrides) -> SheetLayoutSettings:
    values = dict(
        daily_expenses_column="I",
        category_range="A22:A52",
        category_column="J",
        budget_column="K",
        header_rows=1,
        category_first_row=None,
    )
    values.update(overrides)
    return SheetLayoutSettings(**values)


class TestSheetLayout:
    """Tests for building a SheetLayout from settings."""

    def test_defaults_match_template(self):
        layout = SheetLayout.from_settings(layout_settings())
        assert layout.daily_expenses_column == "I"
        assert layout.category_first_row == 22
        assert layout.header_rows == 1

    def test_columns_are_normalized(self):
        layout = SheetLayout.from_settings(layout_settings(budget_column=" k "))
        assert layout.budget_column == "K"

    def test_explicit_first_row_wins(self):
        layout = SheetLayout.from_settings(layout_settings(category_first_row=30))
        assert layout.category_first_row == 30

    @pytest.mark.parametrize("overrides", [
        {"daily_expenses_column": ""},
        {"category_column": "J1"},
        {"budget_column": "ABCD"},
        {"category_range": "not a range"},
        {"category_range": ""},
        {"category_first_row": 0},
    ])
    def test_malformed_layout_is_configuration_error(self, overrides):
        with pytest.raises(ConfigurationError):
            SheetLayout.from_settings(layout_settings(**overrides))

    def test_negative_header_rows_rejected_by_settings(self):
        with pytest.raises(ValueError):
            layout_settings(header_rows=-1)

    def test_open_range_needs_explicit_first_row(self):
        with pytest.raises(ConfigurationError):
            SheetLayout.from_settings(layout_settings(category_range="A:A"))

        layout = SheetLayout.from_settings(
            layout_settings(category_range="A:A", category_first_row=22)
        )
        assert layout.category_first_row == 22

    def test_range_start_row(self):
        assert range_start_row("A22:A52") == 22
        assert range_start_row("b7") == 7
        assert range_start_row("A:A") is None
        assert range_start_row("nonsense") is None


class TestAppSettings:
    """Tests for application settings validation."""

    def test_values(self):
        settings = AppSettings(
            default_language="en",
            sheet_language="ru",
            timezone="Europe/Moscow",
            log_level="debug",
        )
        assert settings.default_language == Language.EN
        assert settings.sheet_language == Language.RU
        assert settings.log_level == "DEBUG"
        assert settings.tzinfo.key == "Europe/Moscow"

    def test_unknown_timezone(self):
        with pytest.raises(ValueError):
            AppSettings(timezone="Mars/Olympus")

    def test_unknown_sheet_name_style(self):
        with pytest.raises(ValueError):
            AppSettings(sheet_name_style="roman")
