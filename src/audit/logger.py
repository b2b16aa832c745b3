"""
Audit Logger

DESIGN DECISION: Every significant action on the ledger is logged.
This provides:
1. Complete traceability of deposits and withdrawals
2. A record of rejected operations and storage problems
3. Debugging capability when the ledger file goes bad

The audit logger:
- Is synchronous, like everything else in the ledger
- Gracefully handles failures (never breaks a ledger operation)
- Stamps one correlation ID on every event of a run
"""

import logging
from collections import deque
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import structlog

from src.models.audit import AuditEvent, AuditEventBuilder


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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "WARNING") -> None:
    """Route structlog output to the current stderr at the given level."""
    logging.basicConfig(format="%(message)s", level=level, force=True)


class AuditLogger:
    """
    Central audit logging service.

    Every event goes to the structured local log. Severity picks the
    log level.
    """

    def __init__(
        self,
        correlation_id: Optional[UUID] = None,
        max_events: int = 1000,
    ):
        """
        Initialize audit logger.

        Args:
            correlation_id: Stamped on every event. A new one is created
                            if not given.
            max_events: How many recent events to keep in memory.
        """
        self._correlation_id = correlation_id or create_correlation_id()
        self._logger = structlog.get_logger("ledger.audit")
        self.events: deque[AuditEvent] = deque(maxlen=max_events)

    @property
    def correlation_id(self) -> UUID:
        return self._correlation_id

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the event could not be written; never raises.
        """
        self.events.append(event)
        log_dict = event.to_log_dict()

        try:
            if event.severity.value in ("error", "critical"):
                self._logger.error("audit_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("audit_event", **log_dict)
            elif event.severity.value == "debug":
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            return False

        return True

    def log_ledger_loaded(
        self,
        location: str,
        transaction_count: int,
        balance: Decimal,
    ) -> None:
        """Log a successful hydrate from storage."""
        self.log(AuditEventBuilder.ledger_loaded(
            location=location,
            transaction_count=transaction_count,
            balance=balance,
            correlation_id=self._correlation_id,
        ))

    def log_storage_not_found(self, location: str) -> None:
        self.log(AuditEventBuilder.storage_not_found(
            location=location,
            correlation_id=self._correlation_id,
        ))

    def log_storage_unreadable(self, location: str, error_message: str) -> None:
        """Log a corrupt or unreadable ledger file."""
        self.log(AuditEventBuilder.storage_unreadable(
            location=location,
            error_message=error_message,
            correlation_id=self._correlation_id,
        ))

    def log_history_validation_failed(
        self,
        location: str,
        issues: list[dict],
    ) -> None:
        self.log(AuditEventBuilder.history_validation_failed(
            location=location,
            issues=issues,
            correlation_id=self._correlation_id,
        ))

    def log_deposit(self, amount: Decimal, balance: Decimal) -> None:
        self.log(AuditEventBuilder.deposit_recorded(
            amount=amount,
            balance=balance,
            correlation_id=self._correlation_id,
        ))

    def log_withdrawal(self, amount: Decimal, balance: Decimal) -> None:
        self.log(AuditEventBuilder.withdrawal_recorded(
            amount=amount,
            balance=balance,
            correlation_id=self._correlation_id,
        ))

    def log_insufficient_funds(self, requested: Decimal, available: Decimal) -> None:
        """Log a rejected withdrawal."""
        self.log(AuditEventBuilder.insufficient_funds(
            requested=requested,
            available=available,
            correlation_id=self._correlation_id,
        ))

    def log_invalid_amount(self, operation: str, value, reason: str) -> None:
        self.log(AuditEventBuilder.invalid_amount_rejected(
            operation=operation,
            value=repr(value),
            reason=reason,
            correlation_id=self._correlation_id,
        ))

    def log_persist_failed(self, location: str, error_message: str) -> None:
        """Log a failed write of the ledger file."""
        self.log(AuditEventBuilder.persist_failed(
            location=location,
            error_message=error_message,
            correlation_id=self._correlation_id,
        ))

    def log_session_started(self, bank_name: str) -> None:
        self.log(AuditEventBuilder.session_started(
            bank_name=bank_name,
            correlation_id=self._correlation_id,
        ))

    def log_session_ended(self, reason: str) -> None:
        self.log(AuditEventBuilder.session_ended(
            reason=reason,
            correlation_id=self._correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    One is created per process run and passed to the AuditLogger.
    """
    return uuid4()
