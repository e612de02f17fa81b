"""
Budget Bot runner

Loads settings, checks them, builds the components and polls
Telegram until interrupted.

Usage:
    python app/main.py
"""

import sys

import structlog

from budget_bot.audit import configure_logging
from budget_bot.bot.telegram import build_application
from budget_bot.config import ConfigurationError, get_settings, validate_all_settings
from budget_bot.orchestrator import create_app_components


logger = structlog.get_logger("budget_bot.main")


def main() -> int:
    """Main application entry point."""
    settings = get_settings()

    status = validate_all_settings()
    failed = [name for name, ok in status.items() if ok is False]
    if failed:
        configure_logging()
        for name in failed:
            logger.error("settings_invalid", group=name, error=status.get(f"{name}_error"))
        return 1

    configure_logging(settings.app.log_level)

    try:
        dispatcher = create_app_components(settings)
    except ConfigurationError as e:
        logger.error("configuration_error", error=str(e))
        return 1

    telegram_settings = settings.telegram
    application = build_application(telegram_settings.bot_token, dispatcher)

    logger.info(
        "bot_starting",
        sheet_language=settings.app.sheet_language.value,
        timezone=settings.app.timezone,
    )
    application.run_polling(timeout=telegram_settings.poll_timeout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
