"""
In-memory spreadsheet.

Stores literal cell contents and, separately, the values a real
spreadsheet would have computed for them. Formulas are never
evaluated. Every call is recorded so tests can assert on the
order and number of remote operations.
"""

from typing import Any, Optional

from budget_bot.services.storage.interface import RemoteError, SpreadsheetInterface


class InMemorySpreadsheet(SpreadsheetInterface):
    """Dictionary-backed SpreadsheetInterface."""

    def __init__(
        self,
        cells: Optional[dict[str, str]] = None,
        values: Optional[dict[str, Any]] = None,
        ranges: Optional[dict[str, list[list[Any]]]] = None,
    ):
        self.cells: dict[str, str] = dict(cells or {})
        self.values: dict[str, Any] = dict(values or {})
        self.ranges: dict[str, list[list[Any]]] = dict(ranges or {})
        self.calls: list[tuple[str, str]] = []
        # (operation, cell) pairs that raise RemoteError when called
        self.failures: set[tuple[str, str]] = set()

    def fail_on(self, operation: str, cell: str) -> None:
        """Make the next and every later `operation` on `cell` fail."""
        self.failures.add((operation, cell))

    def _record(self, operation: str, cell: str) -> None:
        self.calls.append((operation, cell))
        if (operation, cell) in self.failures:
            raise RemoteError(f"Simulated failure: {operation} {cell}")

    @property
    def writes(self) -> list[str]:
        """Cells written so far, in order."""
        return [cell for operation, cell in self.calls if operation == "update_cell"]

    async def get_formula(self, cell: str) -> str:
        self._record("get_formula", cell)
        return self.cells.get(cell, "")

    async def get_value(self, cell: str) -> Optional[Any]:
        self._record("get_value", cell)
        return self.values.get(cell)

    async def update_cell(self, cell: str, value: str) -> None:
        self._record("update_cell", cell)
        self.cells[cell] = value

    async def get_range(self, cell_range: str) -> list[list[Any]]:
        self._record("get_range", cell_range)
        return [list(row) for row in self.ranges.get(cell_range, [])]
