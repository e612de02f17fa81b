"""
Abstract Spreadsheet Interface

DESIGN DECISION: The ledger talks to the spreadsheet through four
cell-level operations and nothing else. This allows us to:
1. Use an in-memory spreadsheet for testing
2. Put a serialization layer in front of writes
3. Keep the ledger decoupled from gspread

Every call is one remote round trip and may fail with RemoteError.
Nothing is retried here.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class SpreadsheetInterface(ABC):
    """
    Abstract interface for the cell operations the ledger needs.

    Cell and range arguments are fully qualified A1 references,
    e.g. "'Октябрь 2026'!I17" or "'Октябрь 2026'!A22:A52".
    """

    @abstractmethod
    async def get_formula(self, cell: str) -> str:
        """
        Read the literal content of a cell.

        Returns:
            The formula text including its leading "=", the plain
            value as text for cells without a formula, or "" if empty

        Raises:
            RemoteError: If the read fails
        """
        pass

    @abstractmethod
    async def get_value(self, cell: str) -> Optional[Any]:
        """
        Read the evaluated value of a cell.

        Returns:
            The value as the spreadsheet computed it (number, text,
            bool), or None if the cell is empty

        Raises:
            RemoteError: If the read fails
        """
        pass

    @abstractmethod
    async def update_cell(self, cell: str, value: str) -> None:
        """
        Write a cell as if a user typed `value` into it.

        A value starting with "=" is stored as a formula.

        Raises:
            RemoteError: If the write fails
        """
        pass

    @abstractmethod
    async def get_range(self, cell_range: str) -> list[list[Any]]:
        """
        Read a rectangular range as rows of cell values.

        Trailing empty rows and cells may be missing from the result.

        Raises:
            RemoteError: If the read fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class RemoteError(StorageError):
    """The spreadsheet service failed to read or write."""
    pass


class ReadError(StorageError):
    """A cell did not hold the kind of value we expected."""
    pass
