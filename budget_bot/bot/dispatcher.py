"""
Command Dispatcher

Turns chat commands into ledger calls and ledger outcomes into
localized replies. It knows nothing about Telegram: the transport
hands it a user id, a command name and the argument text, and sends
back whatever Reply it gets.

DESIGN DECISION: Every outcome, including every failure, becomes a
reply. Errors are logged with the correlation ID of the command.
"""

from datetime import datetime, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable, Optional
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError

from budget_bot.audit import AuditLogger, create_correlation_id
from budget_bot.bot.messages import HELP_BUTTONS, HELP_PROMPT, render
from budget_bot.bot.preferences import InMemoryLanguagePreferences, LanguagePreferences
from budget_bot.ledger import (
    BudgetReader,
    CategoryNotFound,
    ExpenseRecorder,
    format_amount,
    format_budget,
)
from budget_bot.ledger.formula import CENTS
from budget_bot.models.expense import ExpenseEntry, PaymentMethod
from budget_bot.models.locale import Language, parse_payment_token, payment_token
from budget_bot.services.storage import ReadError, RemoteError


COMMAND_START = "start"
COMMAND_ADD = "add"
COMMAND_BUDGET = "budget"
COMMAND_LANG = "lang"
COMMAND_HELP = "help"

HELP_CALLBACKS = {
    "help_ru": Language.RU,
    "help_en": Language.EN,
}


class ReplyButton(BaseModel):
    """An inline button: what it says and what it sends back."""

    label: str
    data: str


class Reply(BaseModel):
    """A message to send back to the chat."""

    text: str
    buttons: list[ReplyButton] = Field(default_factory=list)


class InvalidInput(Exception):
    """A malformed /add command. Nothing was written."""

    def __init__(self, message_key: str, detail: str = ""):
        super().__init__(detail or message_key)
        # Template key of the reply explaining the problem
        self.message_key = message_key


def parse_amount(text: str) -> Decimal:
    """
    Parse a positive amount, rounded to cents. Accepts "," as the
    decimal separator.

    Raises:
        InvalidInput: If `text` is not a number, is too large, or
            rounds to zero or less
    """
    try:
        amount = Decimal(text.strip().replace(",", "."))
        if not amount.is_finite():
            raise InvalidInput("invalid_amount", f"Not a finite amount: {text!r}")
        # Too many digits for the decimal context raises InvalidOperation
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidInput("invalid_amount", f"Not a number: {text!r}")
    if amount <= 0:
        raise InvalidInput("invalid_amount", f"Not a positive amount: {text!r}")
    return amount


def parse_add_arguments(args: str) -> ExpenseEntry:
    """
    Parse "<amount> <payment token> <category words...>".

    Raises:
        InvalidInput: With the key of the reply to send
    """
    fields = (args or "").split()
    if len(fields) < 3:
        raise InvalidInput("add_usage", f"Expected 3 or more fields, got {len(fields)}")

    amount = parse_amount(fields[0])

    payment_method = parse_payment_token(fields[1])
    if payment_method is None:
        raise InvalidInput("invalid_suffix", f"Unknown payment token: {fields[1]!r}")

    try:
        return ExpenseEntry(
            amount=amount,
            payment_method=payment_method,
            category=" ".join(fields[2:]),
        )
    except ValidationError as e:
        raise InvalidInput("add_usage", str(e)) from e


class CommandDispatcher:
    """
    Routes commands to the ledger.

    Commands:
        /start, /add, /budget, /lang, /help; anything else gets the
        "unknown command" reply
    """

    def __init__(
        self,
        recorder: ExpenseRecorder,
        budget_reader: BudgetReader,
        preferences: Optional[LanguagePreferences] = None,
        audit_logger: Optional[AuditLogger] = None,
        tz: tzinfo = timezone.utc,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._recorder = recorder
        self._budget_reader = budget_reader
        self._preferences = preferences or InMemoryLanguagePreferences()
        self._audit_logger = audit_logger or AuditLogger()
        self._clock = clock or (lambda: datetime.now(tz))

    @property
    def preferences(self) -> LanguagePreferences:
        return self._preferences

    async def handle_command(
        self,
        user_id: int,
        command: str,
        args: str = "",
        now: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> Reply:
        """
        Handle one command and build the reply.

        Args:
            user_id: Chat user sending the command
            command: Command name without the leading "/"
            args: Everything after the command
            now: Moment of the command; the clock is read if omitted
            correlation_id: Ties the audit events to the command
        """
        correlation_id = correlation_id or create_correlation_id()
        now = now or self._clock()
        command = command.lower()
        language = self._preferences.get(user_id)

        await self._audit_logger.log_command_received(
            command=command,
            user_id=user_id,
            correlation_id=correlation_id,
        )

        if command == COMMAND_START:
            return Reply(text=render(language, "start"))
        elif command == COMMAND_ADD:
            return await self._handle_add(user_id, args, language, now, correlation_id)
        elif command == COMMAND_BUDGET:
            return await self._handle_budget(language, now, correlation_id)
        elif command == COMMAND_LANG:
            return await self._handle_lang(user_id, args)
        elif command == COMMAND_HELP:
            return self._help_reply()
        else:
            return Reply(text=render(language, "unknown_command"))

    def handle_text(self, user_id: int) -> Reply:
        """Plain text that is not a command gets the greeting."""
        return Reply(text=render(self._preferences.get(user_id), "start"))

    def handle_callback(self, data: str) -> Optional[Reply]:
        """Help language buttons. Unknown callback data is ignored."""
        language = HELP_CALLBACKS.get(data)
        if language is None:
            return None
        return Reply(text=render(language, "help_message"))

    async def _handle_add(
        self,
        user_id: int,
        args: str,
        language: Language,
        now: datetime,
        correlation_id: UUID,
    ) -> Reply:
        try:
            entry = parse_add_arguments(args)
        except InvalidInput as e:
            await self._audit_logger.log_command_rejected(
                command=COMMAND_ADD,
                reason=str(e),
                user_id=user_id,
                correlation_id=correlation_id,
            )
            return Reply(text=render(
                language,
                e.message_key,
                card=payment_token(PaymentMethod.CARD, language),
                cash=payment_token(PaymentMethod.CASH, language),
            ))

        try:
            await self._recorder.record_expense(entry, now, correlation_id)
        except CategoryNotFound as e:
            return Reply(text=render(language, "category_not_found", category=e.category))
        except RemoteError as e:
            await self._audit_logger.log_error(
                error_type="record_expense_failed",
                error_message=str(e),
                correlation_id=correlation_id,
            )
            return Reply(text=render(language, "error_occurred"))

        payment_key = "payment_card" if entry.payment_method == PaymentMethod.CARD else "payment_cash"
        return Reply(text=render(
            language,
            "expense_added",
            amount=format_amount(entry.amount),
            category=entry.category,
            payment=render(language, payment_key),
        ))

    async def _handle_budget(
        self,
        language: Language,
        now: datetime,
        correlation_id: UUID,
    ) -> Reply:
        try:
            budget = await self._budget_reader.get_daily_budget(now, correlation_id)
        except (ReadError, RemoteError) as e:
            await self._audit_logger.log_error(
                error_type="budget_read_failed",
                error_message=str(e),
                correlation_id=correlation_id,
            )
            return Reply(text=render(language, "error_occurred"))

        return Reply(text=render(language, "daily_budget", budget=format_budget(budget)))

    async def _handle_lang(self, user_id: int, args: str) -> Reply:
        choice = (args or "").strip().lower()
        try:
            language = Language(choice)
        except ValueError:
            return Reply(text=render(self._preferences.get(user_id), "select_language"))

        self._preferences.set(user_id, language)
        await self._audit_logger.log_language_set(user_id=user_id, language=language.value)
        return Reply(text=render(language, "language_set", language=language.value))

    def _help_reply(self) -> Reply:
        return Reply(
            text=HELP_PROMPT,
            buttons=[ReplyButton(label=label, data=data) for label, data in HELP_BUTTONS],
        )
