"""
Tests for the gspread-backed spreadsheet.

The gspread spreadsheet object is a MagicMock; we check which values
API calls are made and how their responses are interpreted.
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from budget_bot.services.storage import GoogleSheetsSpreadsheet, RemoteError


CELL = "'Октябрь 2026'!I17"


@pytest.fixture
def gspread_spreadsheet():
    return MagicMock()


@pytest.fixture
def sheets(gspread_spreadsheet):
    client = MagicMock()
    client.get_spreadsheet.return_value = gspread_spreadsheet
    return GoogleSheetsSpreadsheet(client)


class TestGoogleSheetsSpreadsheet:
    """Tests for the values API adapter."""

    def test_get_formula_uses_formula_render_option(self, sheets, gspread_spreadsheet):
        gspread_spreadsheet.values_get.return_value = {"values": [["=400.00+(5.00)"]]}

        assert asyncio.run(sheets.get_formula(CELL)) == "=400.00+(5.00)"
        gspread_spreadsheet.values_get.assert_called_once_with(
            CELL, params={"valueRenderOption": "FORMULA"}
        )

    def test_get_formula_of_empty_cell(self, sheets, gspread_spreadsheet):
        gspread_spreadsheet.values_get.return_value = {"range": CELL}
        assert asyncio.run(sheets.get_formula(CELL)) == ""

    def test_get_formula_of_plain_number(self, sheets, gspread_spreadsheet):
        gspread_spreadsheet.values_get.return_value = {"values": [[150]]}
        assert asyncio.run(sheets.get_formula(CELL)) == "150"

    def test_get_value_uses_unformatted_values(self, sheets, gspread_spreadsheet):
        gspread_spreadsheet.values_get.return_value = {"values": [[123.5]]}

        assert asyncio.run(sheets.get_value(CELL)) == 123.5
        gspread_spreadsheet.values_get.assert_called_once_with(
            CELL, params={"valueRenderOption": "UNFORMATTED_VALUE"}
        )

    def test_get_value_of_empty_cell(self, sheets, gspread_spreadsheet):
        gspread_spreadsheet.values_get.return_value = {"values": [[""]]}
        assert asyncio.run(sheets.get_value(CELL)) is None

    def test_update_cell_is_user_entered(self, sheets, gspread_spreadsheet):
        asyncio.run(sheets.update_cell(CELL, "=400.00"))

        gspread_spreadsheet.values_update.assert_called_once_with(
            CELL,
            params={"valueInputOption": "USER_ENTERED"},
            body={"values": [["=400.00"]]},
        )

    def test_get_range_returns_rows(self, sheets, gspread_spreadsheet):
        gspread_spreadsheet.values_get.return_value = {"values": [["Food"], [], ["Home"]]}
        assert asyncio.run(sheets.get_range("'Октябрь 2026'!A22:A52")) == [["Food"], [], ["Home"]]

    def test_get_range_of_empty_range(self, sheets, gspread_spreadsheet):
        gspread_spreadsheet.values_get.return_value = {}
        assert asyncio.run(sheets.get_range("'Октябрь 2026'!A22:A52")) == []

    def test_api_failure_becomes_remote_error(self, sheets, gspread_spreadsheet):
        gspread_spreadsheet.values_update.side_effect = Exception("quota exceeded")

        with pytest.raises(RemoteError, match="quota exceeded"):
            asyncio.run(sheets.update_cell(CELL, "=1.00"))

    def test_connection_failure_is_remote_error(self):
        client = MagicMock()
        client.get_spreadsheet.side_effect = RemoteError("Spreadsheet not found: x")
        sheets = GoogleSheetsSpreadsheet(client)

        with pytest.raises(RemoteError, match="Spreadsheet not found"):
            asyncio.run(sheets.get_formula(CELL))
