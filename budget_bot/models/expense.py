"""
Core Data Models for Budget Bot

An expense is never stored as a row of its own. It is folded into two
running-sum formulas: the total of the day and the total of its
category. These models describe the inputs and the addresses involved.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class PaymentMethod(str, Enum):
    """
    How an expense was paid.

    Cash terms are written in parentheses so the two kinds stay
    visually distinct inside the same formula.
    """
    CARD = "card"
    CASH = "cash"


class ColumnKind(str, Enum):
    """Semantic columns of a monthly sheet."""
    DAILY_TOTAL = "daily_total"
    CATEGORY = "category"
    BUDGET = "budget"


# =============================================================================
# EXPENSE
# =============================================================================

class ExpenseEntry(BaseModel):
    """
    One expense as typed by the user.

    No identity, no timestamp of its own: the moment of the command
    decides which cells it lands in.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount spent"
    )
    payment_method: PaymentMethod
    category: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Category name as typed, matched against the sheet"
    )

    @field_validator('amount')
    @classmethod
    def amount_must_be_finite(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("Amount must be a finite number")
        return v


# =============================================================================
# ADDRESSING
# =============================================================================

class CellAddress(BaseModel):
    """A single cell of a named sheet."""
    model_config = ConfigDict(frozen=True)

    sheet_name: str = Field(..., min_length=1)
    column: str = Field(..., pattern="^[A-Z]{1,3}$")
    row: int = Field(..., ge=1)

    @property
    def a1(self) -> str:
        """Fully qualified A1 reference, e.g. 'Октябрь 2026'!I17."""
        return f"{quote_sheet_name(self.sheet_name)}!{self.column}{self.row}"

    def __str__(self) -> str:
        return self.a1


def quote_sheet_name(sheet_name: str) -> str:
    """Quote a sheet title for A1 notation (embedded quotes are doubled)."""
    escaped = sheet_name.replace("'", "''")
    return f"'{escaped}'"


# =============================================================================
# RESULTS
# =============================================================================

class CellUpdate(BaseModel):
    """A formula written to a cell."""

    cell: CellAddress
    previous_formula: str
    new_formula: str


class RecordedExpense(BaseModel):
    """Outcome of a fully recorded expense: both cells were written."""

    entry: ExpenseEntry
    recorded_at: datetime
    daily_total: CellUpdate
    category_total: CellUpdate
    category_row_index: int = Field(..., ge=0)
    matched_category: Optional[str] = Field(
        default=None,
        description="Category name as spelled in the sheet"
    )
