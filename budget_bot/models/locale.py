"""
Language selection and the control vocabulary that depends on it.

DESIGN DECISION: Words the bot has to *parse* (payment tokens) and words
it uses to *address* sheets (month names) live here as typed tables.
Display templates live in budget_bot.bot.messages. Editing a reply
text can never break command parsing or sheet lookup.
"""

from enum import Enum
from typing import Optional

from budget_bot.models.expense import PaymentMethod


class Language(str, Enum):
    """Supported languages."""
    EN = "en"
    RU = "ru"


MONTH_NAMES: dict[Language, tuple[str, ...]] = {
    Language.EN: (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    Language.RU: (
        "Январь", "Февраль", "Март", "Апрель", "Май", "Июнь",
        "Июль", "Август", "Сентябрь", "Октябрь", "Ноябрь", "Декабрь",
    ),
}


PAYMENT_TOKENS: dict[Language, dict[str, PaymentMethod]] = {
    Language.EN: {
        "card": PaymentMethod.CARD,
        "cash": PaymentMethod.CASH,
    },
    Language.RU: {
        "карта": PaymentMethod.CARD,
        "нал": PaymentMethod.CASH,
    },
}


def month_name(month: int, language: Language) -> str:
    """Name of a month (1-12) in the given language."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return MONTH_NAMES[language][month - 1]


def parse_payment_token(token: str) -> Optional[PaymentMethod]:
    """
    Map a payment token to a method.

    Case-insensitive. Tokens of every language are accepted, so a user
    who switched the interface language can keep typing what they know.
    """
    token = token.strip().casefold()
    for tokens in PAYMENT_TOKENS.values():
        if token in tokens:
            return tokens[token]
    return None


def payment_token(method: PaymentMethod, language: Language) -> str:
    """The token a user of `language` types for `method`."""
    for token, candidate in PAYMENT_TOKENS[language].items():
        if candidate is method:
            return token
    raise KeyError(method)
