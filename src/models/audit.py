"""
Audit Models for Personal Ledger

Every significant action on the ledger is logged for audit purposes.
This provides:
1. Traceability of every deposit and withdrawal
2. Debugging information when storage goes wrong
3. A record of rejected operations, which never reach the history

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Startup
    LEDGER_LOADED = "ledger_loaded"
    STORAGE_NOT_FOUND = "storage_not_found"
    STORAGE_UNREADABLE = "storage_unreadable"
    HISTORY_VALIDATION_FAILED = "history_validation_failed"

    # Mutations
    DEPOSIT_RECORDED = "deposit_recorded"
    WITHDRAWAL_RECORDED = "withdrawal_recorded"

    # Rejections
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INVALID_AMOUNT_REJECTED = "invalid_amount_rejected"

    # Persistence
    PERSIST_FAILED = "persist_failed"

    # Interactive session
    SESSION_STARTED = "session_started"
    SESSION_ENDED = "session_ended"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


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
        default_factory=datetime.now,
        description="When the event occurred (local time)"
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

    # Correlation - one id per process run
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate all events of one run"
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

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

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
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.deposit_recorded(amount, balance, correlation_id)
        event = AuditEventBuilder.insufficient_funds(requested, available, correlation_id)
    """

    @staticmethod
    def ledger_loaded(
        location: str,
        transaction_count: int,
        balance: Decimal,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            correlation_id=correlation_id,
            description=f"Ledger loaded with {transaction_count} transactions",
            details={
                "location": location,
                "transaction_count": transaction_count,
                "balance": str(balance),
            },
        )

    @staticmethod
    def storage_not_found(
        location: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_NOT_FOUND,
            correlation_id=correlation_id,
            description="No saved records found, starting with an empty ledger",
            details={
                "location": location,
            },
        )

    @staticmethod
    def storage_unreadable(
        location: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_UNREADABLE,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description="Saved records could not be read, starting with an empty ledger",
            error_message=error_message,
            details={
                "location": location,
            },
        )

    @staticmethod
    def history_validation_failed(
        location: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HISTORY_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Stored history failed validation with {len(issues)} issues",
            details={
                "location": location,
                "issues": issues,
            },
        )

    @staticmethod
    def deposit_recorded(
        amount: Decimal,
        balance: Decimal,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DEPOSIT_RECORDED,
            correlation_id=correlation_id,
            description=f"Deposit recorded: {amount}",
            details={
                "amount": str(amount),
                "balance_after": str(balance),
            },
            is_user_action=True,
        )

    @staticmethod
    def withdrawal_recorded(
        amount: Decimal,
        balance: Decimal,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WITHDRAWAL_RECORDED,
            correlation_id=correlation_id,
            description=f"Withdrawal recorded: {amount}",
            details={
                "amount": str(amount),
                "balance_after": str(balance),
            },
            is_user_action=True,
        )

    @staticmethod
    def insufficient_funds(
        requested: Decimal,
        available: Decimal,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INSUFFICIENT_FUNDS,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description="Withdrawal rejected: insufficient funds",
            details={
                "requested": str(requested),
                "available": str(available),
            },
            is_user_action=True,
        )

    @staticmethod
    def invalid_amount_rejected(
        operation: str,
        value: str,
        reason: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVALID_AMOUNT_REJECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Invalid amount rejected for {operation}",
            error_message=reason,
            details={
                "operation": operation,
                "value": value,
            },
            is_user_action=True,
        )

    @staticmethod
    def persist_failed(
        location: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSIST_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description="Failed to persist ledger history",
            error_message=error_message,
            details={
                "location": location,
            },
        )

    @staticmethod
    def session_started(
        bank_name: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_STARTED,
            correlation_id=correlation_id,
            description=f"Interactive session started for {bank_name}",
            is_user_action=True,
        )

    @staticmethod
    def session_ended(
        reason: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_ENDED,
            correlation_id=correlation_id,
            description="Interactive session ended",
            details={
                "reason": reason,
            },
            is_user_action=True,
        )
