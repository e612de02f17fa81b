"""
Data Models Package

This package contains the Pydantic models and enums used across Budget Bot.
"""

from budget_bot.models.expense import (
    CellAddress,
    CellUpdate,
    ColumnKind,
    ExpenseEntry,
    PaymentMethod,
    RecordedExpense,
    quote_sheet_name,
)
from budget_bot.models.locale import (
    Language,
    month_name,
    parse_payment_token,
    payment_token,
)
from budget_bot.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "CellAddress",
    "CellUpdate",
    "ColumnKind",
    "ExpenseEntry",
    "PaymentMethod",
    "RecordedExpense",
    "quote_sheet_name",
    # Locale
    "Language",
    "month_name",
    "parse_payment_token",
    "payment_token",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
