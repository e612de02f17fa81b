"""
Sheet addressing.

Maps a date and a semantic column to a cell of the monthly sheet.
Every function here is pure: the date is always passed in, so the
same inputs always give the same address.
"""

from datetime import date
from typing import Literal, Optional

from budget_bot.config.layout import SheetLayout
from budget_bot.models.expense import CellAddress, ColumnKind, quote_sheet_name
from budget_bot.models.locale import Language, month_name


SheetNameStyle = Literal["month_name", "numeric"]


def sheet_name_for(
    on: date,
    language: Language = Language.RU,
    style: SheetNameStyle = "month_name",
) -> str:
    """
    Title of the sheet holding `on`'s month.

    >>> sheet_name_for(date(2026, 10, 16), Language.EN)
    'October 2026'
    >>> sheet_name_for(date(2026, 10, 16), style="numeric")
    '2026-10'
    """
    if style == "numeric":
        return f"{on.year:04d}-{on.month:02d}"
    return f"{month_name(on.month, language)} {on.year}"


def day_row(on: date, layout: SheetLayout) -> int:
    """Row of `on`'s day: the header rows, then one row per day of month."""
    return on.day + layout.header_rows


def category_row(category_index: int, layout: SheetLayout) -> int:
    """Row of the category at `category_index` within the category range."""
    if category_index < 0:
        raise ValueError(f"Category index must not be negative, got {category_index}")
    return layout.category_first_row + category_index


class SheetAddresser:
    """
    Addresses cells of the monthly sheets for one layout.

    The sheet name depends on the date and on process-wide settings
    only, never on who is asking.
    """

    def __init__(
        self,
        layout: SheetLayout,
        language: Language = Language.RU,
        style: SheetNameStyle = "month_name",
    ):
        self.layout = layout
        self.language = language
        self.style = style

    def sheet_name(self, on: date) -> str:
        return sheet_name_for(on, self.language, self.style)

    def address_for(
        self,
        on: date,
        kind: ColumnKind,
        category_index: Optional[int] = None,
    ) -> CellAddress:
        """
        Cell for `kind` on `on`'s sheet.

        DAILY_TOTAL and BUDGET use the day row; CATEGORY needs the index
        the category resolved to.
        """
        if kind == ColumnKind.DAILY_TOTAL:
            column, row = self.layout.daily_expenses_column, day_row(on, self.layout)
        elif kind == ColumnKind.BUDGET:
            column, row = self.layout.budget_column, day_row(on, self.layout)
        elif kind == ColumnKind.CATEGORY:
            if category_index is None:
                raise ValueError("A category index is required for the category column")
            column, row = self.layout.category_column, category_row(category_index, self.layout)
        else:
            raise ValueError(f"Unknown column kind: {kind}")

        return CellAddress(sheet_name=self.sheet_name(on), column=column, row=row)

    def category_range(self, on: date) -> str:
        """Fully qualified range of the category names on `on`'s sheet."""
        return f"{quote_sheet_name(self.sheet_name(on))}!{self.layout.category_range}"
