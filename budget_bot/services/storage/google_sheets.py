"""
Google Sheets Storage Implementation

DESIGN DECISION: The budget lives in a Google Sheets document because:
1. The spreadsheet already does the arithmetic (formulas, totals)
2. The user keeps editing it by hand alongside the bot
3. No database setup required

TRADEOFFS:
- No transactions: an expense is two separate cell writes
- No compare-and-set: concurrent writers are serialized by CellLocks
  inside this process only

gspread is synchronous; calls run in a worker thread so one slow
request does not stall every other chat.
"""

import asyncio
from typing import Any, Optional

import gspread
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from budget_bot.config import GoogleSheetsSettings, get_settings
from budget_bot.services.storage.interface import (
    RemoteError,
    SpreadsheetInterface,
)


SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication. Only connecting is retried; cell reads and
    writes surface their first failure.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=SCOPES,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise RemoteError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise RemoteError(f"Failed to connect to Google Sheets: {e}") from e

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise RemoteError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
            except Exception as e:
                raise RemoteError(f"Failed to open spreadsheet: {e}") from e
        return self._spreadsheet


def _first_cell(response: dict) -> Optional[Any]:
    rows = response.get("values") or []
    if not rows or not rows[0]:
        return None
    return rows[0][0]


class GoogleSheetsSpreadsheet(SpreadsheetInterface):
    """
    Google Sheets implementation of the spreadsheet interface.

    Uses the values API directly so one call touches exactly one
    cell or range, in any sheet of the document.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _values_get(self, cell_range: str, render_option: str) -> dict:
        try:
            spreadsheet = self._client.get_spreadsheet()
            return spreadsheet.values_get(
                cell_range,
                params={"valueRenderOption": render_option},
            )
        except RemoteError:
            raise
        except Exception as e:
            raise RemoteError(f"Failed to get {cell_range}: {e}") from e

    def _values_update(self, cell: str, value: str) -> None:
        try:
            spreadsheet = self._client.get_spreadsheet()
            spreadsheet.values_update(
                cell,
                params={"valueInputOption": "USER_ENTERED"},
                body={"values": [[value]]},
            )
        except RemoteError:
            raise
        except Exception as e:
            raise RemoteError(f"Failed to update cell {cell}: {e}") from e

    async def get_formula(self, cell: str) -> str:
        """Read a cell with the FORMULA render option."""
        response = await asyncio.to_thread(self._values_get, cell, "FORMULA")
        value = _first_cell(response)
        if value is None:
            return ""
        # Plain numbers come back as numbers even in FORMULA mode
        return value if isinstance(value, str) else str(value)

    async def get_value(self, cell: str) -> Optional[Any]:
        """Read a cell with the UNFORMATTED_VALUE render option."""
        response = await asyncio.to_thread(self._values_get, cell, "UNFORMATTED_VALUE")
        value = _first_cell(response)
        if value == "":
            return None
        return value

    async def update_cell(self, cell: str, value: str) -> None:
        await asyncio.to_thread(self._values_update, cell, value)

    async def get_range(self, cell_range: str) -> list[list[Any]]:
        response = await asyncio.to_thread(self._values_get, cell_range, "UNFORMATTED_VALUE")
        return response.get("values") or []
