"""
Tests for ExpenseRecorder and BudgetReader.

Async operations are driven with asyncio.run; the spreadsheet is an
InMemorySpreadsheet that records every call.
"""

import asyncio
from decimal import Decimal

import pytest

from budget_bot.ledger import BudgetReader, CategoryNotFound, ExpenseRecorder, format_budget
from budget_bot.ledger.recorder import parse_budget_value
from budget_bot.models import ExpenseEntry, PaymentMethod
from budget_bot.services.storage import CellLocks, InMemorySpreadsheet, ReadError, RemoteError


SHEET = "'Октябрь 2026'"
DAILY_CELL = f"{SHEET}!I17"
BUDGET_CELL = f"{SHEET}!K17"
CATEGORY_RANGE = f"{SHEET}!A22:A23"
FOOD_CELL = f"{SHEET}!J22"
TRANSPORT_CELL = f"{SHEET}!J23"


def expense(amount: str, method: PaymentMethod, category: str) -> ExpenseEntry:
    return ExpenseEntry(amount=Decimal(amount), payment_method=method, category=category)


class TestExpenseRecorder:
    """Tests for the two-step expense write."""

    def test_records_daily_and_category_totals(self, spreadsheet, addresser, now):
        """A known category updates both cells."""
        recorder = ExpenseRecorder(spreadsheet, addresser)

        result = asyncio.run(recorder.record_expense(
            expense("400", PaymentMethod.CARD, "transport"), now
        ))

        assert spreadsheet.cells[DAILY_CELL] == "=400.00"
        assert spreadsheet.cells[TRANSPORT_CELL] == "=400.00"
        assert result.category_row_index == 1
        assert result.matched_category == "Transport"
        assert result.daily_total.new_formula == "=400.00"
        assert result.category_total.cell.a1 == TRANSPORT_CELL

    def test_appends_to_existing_formulas(self, spreadsheet, addresser, now):
        spreadsheet.cells[DAILY_CELL] = "=100.00"
        spreadsheet.cells[FOOD_CELL] = "=(20.00)"
        recorder = ExpenseRecorder(spreadsheet, addresser)

        asyncio.run(recorder.record_expense(expense("5.5", PaymentMethod.CASH, "Food"), now))

        assert spreadsheet.cells[DAILY_CELL] == "=100.00+(5.50)"
        assert spreadsheet.cells[FOOD_CELL] == "=(20.00)+(5.50)"

    def test_daily_total_written_before_category(self, spreadsheet, addresser, now):
        """Daily read, daily write, category lookup, category read, category write."""
        recorder = ExpenseRecorder(spreadsheet, addresser)

        asyncio.run(recorder.record_expense(expense("1", PaymentMethod.CARD, "food"), now))

        assert spreadsheet.calls == [
            ("get_formula", DAILY_CELL),
            ("update_cell", DAILY_CELL),
            ("get_range", CATEGORY_RANGE),
            ("get_formula", FOOD_CELL),
            ("update_cell", FOOD_CELL),
        ]

    def test_unknown_category_skips_category_write(self, spreadsheet, addresser, now):
        """
        'add 400 cash home' with categories Food/Transport: the daily total
        is already updated, the category write is never attempted.
        """
        recorder = ExpenseRecorder(spreadsheet, addresser)

        with pytest.raises(CategoryNotFound) as excinfo:
            asyncio.run(recorder.record_expense(expense("400", PaymentMethod.CASH, "home"), now))

        assert excinfo.value.category == "home"
        assert excinfo.value.daily_total.new_formula == "=(400.00)"
        assert spreadsheet.cells[DAILY_CELL] == "=(400.00)"
        assert spreadsheet.writes == [DAILY_CELL]

    def test_daily_write_failure_stops_before_category(self, spreadsheet, addresser, now):
        spreadsheet.fail_on("update_cell", DAILY_CELL)
        recorder = ExpenseRecorder(spreadsheet, addresser)

        with pytest.raises(RemoteError):
            asyncio.run(recorder.record_expense(expense("1", PaymentMethod.CARD, "food"), now))

        assert ("get_range", CATEGORY_RANGE) not in spreadsheet.calls
        assert FOOD_CELL not in spreadsheet.cells

    def test_daily_read_failure_writes_nothing(self, spreadsheet, addresser, now):
        spreadsheet.fail_on("get_formula", DAILY_CELL)
        recorder = ExpenseRecorder(spreadsheet, addresser)

        with pytest.raises(RemoteError):
            asyncio.run(recorder.record_expense(expense("1", PaymentMethod.CARD, "food"), now))

        assert spreadsheet.writes == []

    def test_category_write_failure_leaves_daily_total(self, spreadsheet, addresser, now):
        """No rollback: the daily total keeps the new term."""
        spreadsheet.fail_on("update_cell", FOOD_CELL)
        recorder = ExpenseRecorder(spreadsheet, addresser)

        with pytest.raises(RemoteError):
            asyncio.run(recorder.record_expense(expense("3", PaymentMethod.CARD, "food"), now))

        assert spreadsheet.cells[DAILY_CELL] == "=3.00"
        assert FOOD_CELL not in spreadsheet.cells

    def test_category_catalog_read_every_time(self, spreadsheet, addresser, now):
        """Edits to the category list take effect on the next command."""
        recorder = ExpenseRecorder(spreadsheet, addresser)

        with pytest.raises(CategoryNotFound):
            asyncio.run(recorder.record_expense(expense("1", PaymentMethod.CARD, "home"), now))

        spreadsheet.ranges[CATEGORY_RANGE] = [["Food"], ["Home"]]
        asyncio.run(recorder.record_expense(expense("1", PaymentMethod.CARD, "home"), now))

        assert spreadsheet.cells[TRANSPORT_CELL] == "=1.00"
        assert [call for call in spreadsheet.calls if call[0] == "get_range"] == [
            ("get_range", CATEGORY_RANGE),
            ("get_range", CATEGORY_RANGE),
        ]


class SlowSpreadsheet(InMemorySpreadsheet):
    """Yields to the event loop between reading and writing."""

    async def get_formula(self, cell: str) -> str:
        value = await super().get_formula(cell)
        await asyncio.sleep(0)
        return value


class TestConcurrentRecording:
    """Tests for per-cell serialization."""

    def test_concurrent_expenses_are_all_kept(self, addresser, now):
        spreadsheet = SlowSpreadsheet(
            ranges={CATEGORY_RANGE: [["Food"], ["Transport"]]}
        )
        recorder = ExpenseRecorder(spreadsheet, addresser, locks=CellLocks())

        async def record_many():
            await asyncio.gather(*[
                recorder.record_expense(expense(str(i), PaymentMethod.CARD, "food"), now)
                for i in range(1, 6)
            ])

        asyncio.run(record_many())

        daily_terms = spreadsheet.cells[DAILY_CELL].lstrip("=").split("+")
        food_terms = spreadsheet.cells[FOOD_CELL].lstrip("=").split("+")
        assert sorted(daily_terms) == ["1.00", "2.00", "3.00", "4.00", "5.00"]
        assert sorted(food_terms) == ["1.00", "2.00", "3.00", "4.00", "5.00"]

    def test_locks_are_per_cell(self):
        locks = CellLocks()
        assert locks.lock_for("'A'!I2") is locks.lock_for("'A'!I2")
        assert locks.lock_for("'A'!I2") is not locks.lock_for("'A'!I3")
        assert len(locks) == 2


class TestBudgetReader:
    """Tests for reading today's budget."""

    def test_reads_budget_cell_of_today(self, addresser, now):
        spreadsheet = InMemorySpreadsheet(values={BUDGET_CELL: 123.5})
        reader = BudgetReader(spreadsheet, addresser)

        value = asyncio.run(reader.get_daily_budget(now))

        assert value == Decimal("123.5")
        assert format_budget(value) == "123.50"
        assert spreadsheet.calls == [("get_value", BUDGET_CELL)]

    def test_empty_cell_is_read_error(self, addresser, now):
        reader = BudgetReader(InMemorySpreadsheet(), addresser)
        with pytest.raises(ReadError):
            asyncio.run(reader.get_daily_budget(now))

    def test_text_cell_is_read_error(self, addresser, now):
        reader = BudgetReader(InMemorySpreadsheet(values={BUDGET_CELL: "#REF!"}), addresser)
        with pytest.raises(ReadError):
            asyncio.run(reader.get_daily_budget(now))

    def test_remote_failure_propagates(self, addresser, now):
        spreadsheet = InMemorySpreadsheet(values={BUDGET_CELL: 10})
        spreadsheet.fail_on("get_value", BUDGET_CELL)
        reader = BudgetReader(spreadsheet, addresser)
        with pytest.raises(RemoteError):
            asyncio.run(reader.get_daily_budget(now))


class TestBudgetValues:
    """Tests for budget parsing and formatting."""

    @pytest.mark.parametrize("raw, expected", [
        (123.5, Decimal("123.5")),
        (0, Decimal("0")),
        (-40, Decimal("-40")),
        ("250.75", Decimal("250.75")),
    ])
    def test_numeric_values(self, raw, expected):
        assert parse_budget_value(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", True, "NaN"])
    def test_non_numeric_values(self, raw):
        with pytest.raises(ReadError):
            parse_budget_value(raw)

    def test_format_two_decimals(self):
        assert format_budget(Decimal("123.5")) == "123.50"
        assert format_budget(Decimal("-7")) == "-7.00"
        assert format_budget(Decimal("1.005")) == "1.01"
