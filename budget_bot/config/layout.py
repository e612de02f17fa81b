"""
Sheet layout: which columns and rows of a monthly sheet the bot touches.

Built once from SheetLayoutSettings at startup. Anything malformed here
is a ConfigurationError; it would otherwise surface as writes landing in
the wrong cells.
"""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from budget_bot.config.settings import ConfigurationError, SheetLayoutSettings


_COLUMN_RE = re.compile(r"^[A-Z]{1,3}$")
_RANGE_RE = re.compile(r"^([A-Z]{1,3})(\d+)?(?::([A-Z]{1,3})(\d+)?)?$")


def _normalize_column(v: str) -> str:
    v = (v or "").strip().upper()
    if not _COLUMN_RE.match(v):
        raise ValueError(f"Not a column letter: {v!r}")
    return v


class SheetLayout(BaseModel):
    """Validated, immutable description of the budget template."""
    model_config = ConfigDict(frozen=True)

    daily_expenses_column: str
    category_range: str
    category_column: str
    budget_column: str
    header_rows: int = Field(default=1, ge=0)
    category_first_row: int = Field(..., ge=1)

    @field_validator('daily_expenses_column', 'category_column', 'budget_column', mode='before')
    @classmethod
    def validate_column(cls, v: str) -> str:
        return _normalize_column(v)

    @field_validator('category_range', mode='before')
    @classmethod
    def validate_range(cls, v: str) -> str:
        v = (v or "").strip().upper()
        if not _RANGE_RE.match(v):
            raise ValueError(f"Not an A1 range: {v!r}")
        return v

    @model_validator(mode='before')
    @classmethod
    def default_first_row(cls, data):
        if isinstance(data, dict) and data.get("category_first_row") is None:
            data = dict(data)
            data["category_first_row"] = range_start_row(data.get("category_range") or "")
        return data

    @classmethod
    def from_settings(cls, settings: SheetLayoutSettings) -> "SheetLayout":
        """
        Build a layout from settings.

        Raises:
            ConfigurationError: If any column, range or row is invalid
        """
        try:
            return cls(**settings.model_dump())
        except ValidationError as e:
            raise ConfigurationError(f"Invalid sheet layout: {e}") from e


def range_start_row(a1_range: str) -> Optional[int]:
    """First row number of an A1 range like 'A22:A52', or None for 'A:A'."""
    match = _RANGE_RE.match((a1_range or "").strip().upper())
    if not match or match.group(2) is None:
        return None
    return int(match.group(2))
