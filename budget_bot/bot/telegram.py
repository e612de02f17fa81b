"""
Telegram transport.

Wires the CommandDispatcher into python-telegram-bot: one handler per
command, a catch-all for plain text, and the help language buttons.
Updates are processed concurrently, one task per incoming message.
"""

from typing import Optional

import structlog
from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from budget_bot.audit import create_correlation_id
from budget_bot.bot.dispatcher import (
    COMMAND_ADD,
    COMMAND_BUDGET,
    COMMAND_HELP,
    COMMAND_LANG,
    COMMAND_START,
    CommandDispatcher,
    Reply,
)
from budget_bot.bot.messages import render


logger = structlog.get_logger("budget_bot.telegram")

COMMANDS = (COMMAND_START, COMMAND_ADD, COMMAND_BUDGET, COMMAND_LANG, COMMAND_HELP)


def reply_markup(reply: Reply) -> Optional[InlineKeyboardMarkup]:
    """Inline keyboard for a reply, all buttons on one row."""
    if not reply.buttons:
        return None
    return InlineKeyboardMarkup([
        [InlineKeyboardButton(button.label, callback_data=button.data) for button in reply.buttons]
    ])


class TelegramBot:
    """Adapter between Telegram updates and the dispatcher."""

    def __init__(self, dispatcher: CommandDispatcher):
        self._dispatcher = dispatcher

    async def on_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.effective_message
        user = update.effective_user
        if message is None or user is None or not message.text:
            return

        parts = message.text.split(maxsplit=1)
        command = parts[0]
        args = parts[1] if len(parts) > 1 else ""
        # "/add@MyBot 400 ..." -> "add"
        command = command.lstrip("/").split("@", 1)[0]

        reply = await self._dispatcher.handle_command(
            user_id=user.id,
            command=command,
            args=args,
            correlation_id=create_correlation_id(),
        )
        await message.reply_text(reply.text, reply_markup=reply_markup(reply))

    async def on_text(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.effective_message
        user = update.effective_user
        if message is None or user is None:
            return
        reply = self._dispatcher.handle_text(user.id)
        await message.reply_text(reply.text)

    async def on_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        if query is None:
            return

        reply = self._dispatcher.handle_callback(query.data or "")
        if reply is not None and query.message is not None:
            await context.bot.send_message(chat_id=query.message.chat.id, text=reply.text)
        await query.answer()

    async def on_error(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Log handler failures and still tell the user something went wrong."""
        logger.error("handler_failed", error=str(context.error), exc_info=context.error)

        if not isinstance(update, Update):
            return
        message, user = update.effective_message, update.effective_user
        if message is not None and user is not None:
            language = self._dispatcher.preferences.get(user.id)
            await message.reply_text(render(language, "error_occurred"))

    def register(self, application: Application) -> None:
        for command in COMMANDS:
            application.add_handler(CommandHandler(command, self.on_command))
        # Unknown commands still get a reply
        application.add_handler(MessageHandler(filters.COMMAND, self.on_command))
        application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, self.on_text))
        application.add_handler(CallbackQueryHandler(self.on_callback))
        application.add_error_handler(self.on_error)


def build_application(bot_token: str, dispatcher: CommandDispatcher) -> Application:
    """Telegram application with every handler registered."""
    application = (
        Application.builder()
        .token(bot_token)
        .concurrent_updates(True)
        .build()
    )
    TelegramBot(dispatcher).register(application)
    return application
