"""
Audit Models for Budget Bot

Every command that touches the spreadsheet leaves a trail of events.
This provides:
1. Traceability of every cell write
2. Debugging information when things go wrong
3. A record of partial writes that need manual attention

DESIGN DECISION: Audit events are emitted, never edited.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Commands
    COMMAND_RECEIVED = "command_received"
    COMMAND_REJECTED = "command_rejected"
    LANGUAGE_SET = "language_set"

    # Spreadsheet writes
    CELL_UPDATED = "cell_updated"
    EXPENSE_RECORDED = "expense_recorded"
    CATEGORY_NOT_FOUND = "category_not_found"
    PARTIAL_WRITE = "partial_write"

    # Spreadsheet reads
    BUDGET_READ = "budget_read"

    # System events
    SYSTEM_ERROR = "system_error"
    EXTERNAL_SERVICE_ERROR = "external_service_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - all events of one chat command share this
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate the events of one command"
    )
    user_id: Optional[int] = Field(
        default=None,
        description="Chat user who triggered the event"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "user_id": self.user_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.cell_updated(cell, formula, correlation_id)
        event = AuditEventBuilder.category_not_found("home", correlation_id)
    """

    @staticmethod
    def command_received(
        command: str,
        user_id: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_RECEIVED,
            severity=AuditSeverity.DEBUG,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"Command received: /{command}",
            details={"command": command},
        )

    @staticmethod
    def command_rejected(
        command: str,
        reason: str,
        user_id: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_REJECTED,
            severity=AuditSeverity.WARNING,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"Command rejected: /{command}",
            details={"command": command, "reason": reason},
        )

    @staticmethod
    def language_set(
        user_id: int,
        language: str
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LANGUAGE_SET,
            user_id=user_id,
            description=f"Language set to {language}",
            details={"language": language},
        )

    @staticmethod
    def cell_updated(
        cell: str,
        formula: str,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CELL_UPDATED,
            correlation_id=correlation_id,
            description=f"Cell updated: {cell}",
            details={"cell": cell, "formula": formula},
        )

    @staticmethod
    def expense_recorded(
        amount: str,
        payment_method: str,
        category: str,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_RECORDED,
            correlation_id=correlation_id,
            description=f"Expense recorded: {amount} ({payment_method}) in {category}",
            details={
                "amount": amount,
                "payment_method": payment_method,
                "category": category,
            },
        )

    @staticmethod
    def category_not_found(
        category: str,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Category not found: {category}",
            details={"category": category},
        )

    @staticmethod
    def partial_write(
        written_cell: str,
        failed_step: str,
        error_message: str,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PARTIAL_WRITE,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Daily total written to {written_cell} but {failed_step} failed",
            details={"written_cell": written_cell, "failed_step": failed_step},
            error_message=error_message,
        )

    @staticmethod
    def budget_read(
        cell: str,
        value: str,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_READ,
            correlation_id=correlation_id,
            description=f"Budget read from {cell}",
            details={"cell": cell, "value": value},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )

    @staticmethod
    def external_service_error(
        service: str,
        error_message: str,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXTERNAL_SERVICE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"External service error: {service}",
            error_message=error_message,
            details={
                "service": service,
            },
            correlation_id=correlation_id,
        )
