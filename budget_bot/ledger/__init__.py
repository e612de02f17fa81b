"""
Ledger package: turning expenses into spreadsheet cell updates.
"""

from budget_bot.ledger.addressing import SheetAddresser, category_row, day_row, sheet_name_for
from budget_bot.ledger.categories import resolve_category
from budget_bot.ledger.formula import accumulate, format_amount, format_term
from budget_bot.ledger.recorder import (
    BudgetReader,
    CategoryNotFound,
    ExpenseRecorder,
    format_budget,
    parse_budget_value,
)

__all__ = [
    "BudgetReader",
    "CategoryNotFound",
    "ExpenseRecorder",
    "SheetAddresser",
    "accumulate",
    "category_row",
    "day_row",
    "format_amount",
    "format_budget",
    "format_term",
    "parse_budget_value",
    "resolve_category",
    "sheet_name_for",
]
