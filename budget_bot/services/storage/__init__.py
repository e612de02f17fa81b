"""
Storage Services Package

Provides the abstract spreadsheet interface and its implementations.
Google Sheets is the production backend; the in-memory one backs tests.
"""

from budget_bot.services.storage.interface import (
    ReadError,
    RemoteError,
    SpreadsheetInterface,
    StorageError,
)
from budget_bot.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsSpreadsheet,
)
from budget_bot.services.storage.locking import CellLocks
from budget_bot.services.storage.memory import InMemorySpreadsheet

__all__ = [
    # Interface
    "SpreadsheetInterface",
    # Exceptions
    "ReadError",
    "RemoteError",
    "StorageError",
    # Implementations
    "CellLocks",
    "GoogleSheetsClient",
    "GoogleSheetsSpreadsheet",
    "InMemorySpreadsheet",
]
