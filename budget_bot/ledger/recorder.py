"""
Expense recording and budget reading.

This module is where a parsed command becomes spreadsheet traffic:
1. Record → append a term to the day's total, then to the category's total
2. Budget → read the evaluated remaining budget of the day

DESIGN DECISION: The two writes of an expense are not atomic.
The daily total is written first. If the category step then fails
(unknown category or remote error) the daily total stays updated and
nothing is rolled back. The failure is raised to the caller and logged
as a partial write so it can be fixed by hand.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from uuid import UUID

from budget_bot.audit import AuditLogger
from budget_bot.ledger.addressing import SheetAddresser
from budget_bot.ledger.categories import category_label, resolve_category
from budget_bot.ledger.formula import accumulate, format_amount
from budget_bot.models.expense import (
    CellAddress,
    CellUpdate,
    ColumnKind,
    ExpenseEntry,
    RecordedExpense,
)
from budget_bot.services.storage import (
    CellLocks,
    ReadError,
    RemoteError,
    SpreadsheetInterface,
)


class CategoryNotFound(Exception):
    """The category is not listed in the sheet's category range."""

    def __init__(self, category: str, daily_total: Optional[CellUpdate] = None):
        super().__init__(f"Category not found: {category}")
        self.category = category
        # Set when the daily total had already been written
        self.daily_total = daily_total


class ExpenseRecorder:
    """
    Records expenses as running-sum formulas.

    Each cell is updated by read-modify-write under that cell's lock,
    so concurrent commands in this process cannot lose an expense.
    """

    def __init__(
        self,
        spreadsheet: SpreadsheetInterface,
        addresser: SheetAddresser,
        locks: Optional[CellLocks] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._spreadsheet = spreadsheet
        self._addresser = addresser
        self._locks = locks or CellLocks()
        self._audit_logger = audit_logger or AuditLogger()

    async def record_expense(
        self,
        entry: ExpenseEntry,
        on: datetime,
        correlation_id: Optional[UUID] = None,
    ) -> RecordedExpense:
        """
        Add one expense to the day's total and to its category's total.

        Args:
            entry: The parsed expense
            on: Moment of the command; only its date is used
            correlation_id: Ties the audit events to the command

        Returns:
            Both cell updates

        Raises:
            RemoteError: If any read or write fails
            CategoryNotFound: If the category is not in the sheet;
                the daily total has already been written
        """
        # Step 1: daily total. A failure here stops before any category work.
        daily_cell = self._addresser.address_for(on, ColumnKind.DAILY_TOTAL)
        daily_update = await self._append(daily_cell, entry, correlation_id)

        # Step 2: category total
        try:
            category_range = self._addresser.category_range(on)
            rows = await self._call_remote(
                self._spreadsheet.get_range(category_range), correlation_id
            )

            index, found = resolve_category(rows, entry.category)
            if not found:
                await self._audit_logger.log_category_not_found(
                    category=entry.category,
                    correlation_id=correlation_id,
                )
                raise CategoryNotFound(entry.category, daily_total=daily_update)

            category_cell = self._addresser.address_for(
                on, ColumnKind.CATEGORY, category_index=index
            )
            category_update = await self._append(category_cell, entry, correlation_id)
        except (CategoryNotFound, RemoteError) as e:
            await self._audit_logger.log_partial_write(
                written_cell=daily_cell.a1,
                failed_step="category total",
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

        await self._audit_logger.log_expense_recorded(
            amount=format_amount(entry.amount),
            payment_method=entry.payment_method.value,
            category=entry.category,
            correlation_id=correlation_id,
        )

        return RecordedExpense(
            entry=entry,
            recorded_at=on,
            daily_total=daily_update,
            category_total=category_update,
            category_row_index=index,
            matched_category=category_label(rows, index),
        )

    async def _append(
        self,
        cell: CellAddress,
        entry: ExpenseEntry,
        correlation_id: Optional[UUID],
    ) -> CellUpdate:
        async with self._locks.hold(cell.a1):
            previous = await self._call_remote(
                self._spreadsheet.get_formula(cell.a1), correlation_id
            )
            new_formula = accumulate(previous, entry.amount, entry.payment_method)
            await self._call_remote(
                self._spreadsheet.update_cell(cell.a1, new_formula), correlation_id
            )

        await self._audit_logger.log_cell_updated(
            cell=cell.a1,
            formula=new_formula,
            correlation_id=correlation_id,
        )
        return CellUpdate(cell=cell, previous_formula=previous, new_formula=new_formula)

    async def _call_remote(self, operation, correlation_id: Optional[UUID]):
        try:
            return await operation
        except RemoteError as e:
            await self._audit_logger.log_external_service_error(
                service="google_sheets",
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise


class BudgetReader:
    """Reads the remaining budget of a day."""

    def __init__(
        self,
        spreadsheet: SpreadsheetInterface,
        addresser: SheetAddresser,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._spreadsheet = spreadsheet
        self._addresser = addresser
        self._audit_logger = audit_logger or AuditLogger()

    async def get_daily_budget(
        self,
        on: date,
        correlation_id: Optional[UUID] = None,
    ) -> Decimal:
        """
        Evaluated value of the budget cell of `on`'s day.

        Raises:
            RemoteError: If the read fails
            ReadError: If the cell is empty or not a number
        """
        cell = self._addresser.address_for(on, ColumnKind.BUDGET)
        try:
            raw = await self._spreadsheet.get_value(cell.a1)
        except RemoteError as e:
            await self._audit_logger.log_external_service_error(
                service="google_sheets",
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

        value = parse_budget_value(raw, cell.a1)
        await self._audit_logger.log_budget_read(
            cell=cell.a1,
            value=str(value),
            correlation_id=correlation_id,
        )
        return value


def parse_budget_value(raw: Any, cell: str = "budget cell") -> Decimal:
    """
    Turn an evaluated cell value into a Decimal.

    Raises:
        ReadError: If the value is missing or not numeric
    """
    if raw is None or raw == "":
        raise ReadError(f"{cell} is empty")
    if isinstance(raw, bool):
        raise ReadError(f"{cell} is not a number: {raw!r}")
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        raise ReadError(f"{cell} is not a number: {raw!r}")
    if not value.is_finite():
        raise ReadError(f"{cell} is not a number: {raw!r}")
    return value


def format_budget(value: Decimal) -> str:
    """Budget with exactly two decimals: 123.5 -> '123.50'."""
    return format_amount(value)
