"""Chat command handling package."""

from budget_bot.bot.dispatcher import (
    CommandDispatcher,
    InvalidInput,
    Reply,
    ReplyButton,
    parse_add_arguments,
    parse_amount,
)
from budget_bot.bot.preferences import InMemoryLanguagePreferences, LanguagePreferences

__all__ = [
    "CommandDispatcher",
    "InMemoryLanguagePreferences",
    "InvalidInput",
    "LanguagePreferences",
    "Reply",
    "ReplyButton",
    "parse_add_arguments",
    "parse_amount",
]
