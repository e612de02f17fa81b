"""
Audit Logger

DESIGN DECISION: Every cell write, every failed remote call and every
rejected command is logged. This provides:
1. Traceability of what the bot did to the spreadsheet
2. Debugging capability
3. A way to find partial writes that need fixing by hand

Events are written to the structured local log only; the spreadsheet
is never used for logging.
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from budget_bot.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(ensure_ascii=False)
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through the stdlib root logger at `level`."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))


class AuditLogger:
    """
    Central audit logging service.

    Every event is logged at the level matching its severity.
    """

    def __init__(self, logger_name: str = "budget_bot.audit"):
        self._logger = structlog.get_logger(logger_name)

    async def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    async def log_command_received(
        self,
        command: str,
        user_id: int,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.command_received(
            command=command,
            user_id=user_id,
            correlation_id=correlation_id,
        ))

    async def log_command_rejected(
        self,
        command: str,
        reason: str,
        user_id: int,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.command_rejected(
            command=command,
            reason=reason,
            user_id=user_id,
            correlation_id=correlation_id,
        ))

    async def log_language_set(self, user_id: int, language: str) -> None:
        await self.log(AuditEventBuilder.language_set(user_id=user_id, language=language))

    async def log_cell_updated(
        self,
        cell: str,
        formula: str,
        correlation_id: Optional[UUID],
    ) -> None:
        """Log a formula written to a cell."""
        await self.log(AuditEventBuilder.cell_updated(
            cell=cell,
            formula=formula,
            correlation_id=correlation_id,
        ))

    async def log_expense_recorded(
        self,
        amount: str,
        payment_method: str,
        category: str,
        correlation_id: Optional[UUID],
    ) -> None:
        await self.log(AuditEventBuilder.expense_recorded(
            amount=amount,
            payment_method=payment_method,
            category=category,
            correlation_id=correlation_id,
        ))

    async def log_category_not_found(
        self,
        category: str,
        correlation_id: Optional[UUID],
    ) -> None:
        await self.log(AuditEventBuilder.category_not_found(
            category=category,
            correlation_id=correlation_id,
        ))

    async def log_partial_write(
        self,
        written_cell: str,
        failed_step: str,
        error_message: str,
        correlation_id: Optional[UUID],
    ) -> None:
        """Log a daily total that was written without its category total."""
        await self.log(AuditEventBuilder.partial_write(
            written_cell=written_cell,
            failed_step=failed_step,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    async def log_budget_read(
        self,
        cell: str,
        value: str,
        correlation_id: Optional[UUID],
    ) -> None:
        await self.log(AuditEventBuilder.budget_read(
            cell=cell,
            value=value,
            correlation_id=correlation_id,
        ))

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        await self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))

    async def log_external_service_error(
        self,
        service: str,
        error_message: str,
        correlation_id: Optional[UUID],
    ) -> None:
        """Log external service error."""
        await self.log(AuditEventBuilder.external_service_error(
            service=service,
            error_message=error_message,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this when a chat command arrives and pass it through
    every operation the command triggers.
    """
    return uuid4()
