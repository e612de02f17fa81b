"""
Component wiring for Budget Bot

Builds the object graph the bot runs on:
    spreadsheet → recorder / budget reader → dispatcher

DESIGN DECISION: Every collaborator is passed in explicitly.
Tests swap the spreadsheet for InMemorySpreadsheet and pin the
clock; nothing reads global state after startup.
"""

from typing import Optional

from budget_bot.audit import AuditLogger
from budget_bot.bot import CommandDispatcher, InMemoryLanguagePreferences
from budget_bot.config import SheetLayout, Settings, get_settings
from budget_bot.ledger import BudgetReader, ExpenseRecorder, SheetAddresser
from budget_bot.services.storage import (
    CellLocks,
    GoogleSheetsClient,
    GoogleSheetsSpreadsheet,
    SpreadsheetInterface,
)


def create_app_components(
    settings: Optional[Settings] = None,
    spreadsheet: Optional[SpreadsheetInterface] = None,
) -> CommandDispatcher:
    """
    Factory function to create all application components.

    Args:
        settings: Loaded settings; get_settings() if omitted
        spreadsheet: Storage backend; Google Sheets if omitted

    Returns:
        The dispatcher, ready to be attached to a transport

    Raises:
        ConfigurationError: If the sheet layout is invalid
    """
    settings = settings or get_settings()
    app_settings = settings.app

    layout = SheetLayout.from_settings(settings.sheet_layout)
    addresser = SheetAddresser(
        layout,
        language=app_settings.sheet_language,
        style=app_settings.sheet_name_style,
    )

    if spreadsheet is None:
        spreadsheet = GoogleSheetsSpreadsheet(GoogleSheetsClient(settings.google_sheets))

    audit_logger = AuditLogger()

    recorder = ExpenseRecorder(
        spreadsheet,
        addresser,
        locks=CellLocks(),
        audit_logger=audit_logger,
    )
    budget_reader = BudgetReader(spreadsheet, addresser, audit_logger=audit_logger)

    return CommandDispatcher(
        recorder,
        budget_reader,
        preferences=InMemoryLanguagePreferences(default=app_settings.default_language),
        audit_logger=audit_logger,
        tz=app_settings.tzinfo,
    )
