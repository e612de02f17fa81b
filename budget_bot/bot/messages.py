"""
Reply templates, per language.

Display text only. Nothing here is parsed back: payment tokens and
month names are in budget_bot.models.locale.
"""

from budget_bot.models.locale import Language


HELP_PROMPT = "Please select your language / Пожалуйста, выберите язык:"

HELP_BUTTONS = (
    ("🇷🇺 Русский", "help_ru"),
    ("🇬🇧 English", "help_en"),
)


MESSAGES: dict[Language, dict[str, str]] = {
    Language.EN: {
        "start": (
            "Hi! I record your expenses in the budget spreadsheet.\n"
            "Send /add 400 card food to add an expense, /budget to see "
            "what is left for today, /help for details."
        ),
        "help_message": (
            "Commands:\n"
            "/add <amount> <card|cash> <category> - add an expense\n"
            "    e.g. /add 250.50 cash transport\n"
            "/budget - remaining budget for today\n"
            "/lang <en|ru> - change the language\n"
            "/help - this message"
        ),
        "add_usage": "Usage: /add <amount> <{card}|{cash}> <category>",
        "invalid_amount": "The amount must be a positive number, e.g. 250.50",
        "invalid_suffix": "Payment method must be '{card}' or '{cash}'",
        "expense_added": "✅ Added {amount} to \"{category}\" ({payment})",
        "payment_card": "card",
        "payment_cash": "cash",
        "category_not_found": (
            "Category \"{category}\" was not found in the sheet. "
            "The daily total already includes this expense; "
            "add it to a category by hand or check the spelling."
        ),
        "daily_budget": "💰 Budget for today: {budget}",
        "error_occurred": "Something went wrong talking to the spreadsheet. Please try again later.",
        "language_set": "Language set to {language}",
        "select_language": "Choose a language: /lang en or /lang ru",
        "unknown_command": "Unknown command. Send /help to see what I can do.",
    },
    Language.RU: {
        "start": (
            "Привет! Я записываю расходы в таблицу бюджета.\n"
            "Отправьте /add 400 карта еда, чтобы добавить расход, /budget — "
            "чтобы узнать остаток на сегодня, /help — справка."
        ),
        "help_message": (
            "Команды:\n"
            "/add <сумма> <карта|нал> <категория> — добавить расход\n"
            "    например, /add 250.50 нал транспорт\n"
            "/budget — остаток бюджета на сегодня\n"
            "/lang <en|ru> — сменить язык\n"
            "/help — эта справка"
        ),
        "add_usage": "Формат: /add <сумма> <{card}|{cash}> <категория>",
        "invalid_amount": "Сумма должна быть положительным числом, например 250.50",
        "invalid_suffix": "Способ оплаты: «{card}» или «{cash}»",
        "expense_added": "✅ Добавлено {amount} в «{category}» ({payment})",
        "payment_card": "карта",
        "payment_cash": "наличные",
        "category_not_found": (
            "Категория «{category}» не найдена в таблице. "
            "Расход уже учтён в итоге за день; "
            "добавьте его в категорию вручную или проверьте написание."
        ),
        "daily_budget": "💰 Бюджет на сегодня: {budget}",
        "error_occurred": "Не удалось обратиться к таблице. Попробуйте позже.",
        "language_set": "Язык изменён: {language}",
        "select_language": "Выберите язык: /lang en или /lang ru",
        "unknown_command": "Неизвестная команда. Отправьте /help, чтобы увидеть список.",
    },
}


def render(language: Language, key: str, /, **fields) -> str:
    """Fill the template `key` of `language` with `fields`."""
    return MESSAGES[language][key].format(**fields)
