"""
Shared fixtures.

Every test runs against InMemorySpreadsheet; no test talks to Google
or Telegram. Dates are fixed so sheet names and rows are predictable:
16 October 2026 -> sheet 'Октябрь 2026', day row 17.
"""

from datetime import datetime, timezone

import pytest

from budget_bot.config import SheetLayout
from budget_bot.ledger import SheetAddresser
from budget_bot.models import Language
from budget_bot.services.storage import InMemorySpreadsheet


CATEGORY_RANGE = "'Октябрь 2026'!A22:A23"


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 16, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def layout() -> SheetLayout:
    return SheetLayout(
        daily_expenses_column="I",
        category_range="A22:A23",
        category_column="J",
        budget_column="K",
    )


@pytest.fixture
def addresser(layout: SheetLayout) -> SheetAddresser:
    return SheetAddresser(layout, language=Language.RU)


@pytest.fixture
def spreadsheet() -> InMemorySpreadsheet:
    return InMemorySpreadsheet(ranges={CATEGORY_RANGE: [["Food"], ["Transport"]]})
