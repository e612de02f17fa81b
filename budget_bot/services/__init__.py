"""Services package."""

from budget_bot.services.storage import (
    CellLocks,
    InMemorySpreadsheet,
    ReadError,
    RemoteError,
    SpreadsheetInterface,
    StorageError,
)

__all__ = [
    "CellLocks",
    "InMemorySpreadsheet",
    "ReadError",
    "RemoteError",
    "SpreadsheetInterface",
    "StorageError",
]
