"""
Data Models Package

This package contains all Pydantic models used in the Personal Ledger.
Everything that is stored or logged conforms to these schemas.
"""

from src.models.transaction import (
    CENT,
    ZERO,
    Transaction,
    TransactionKind,
    ValidationIssue,
    ValidationResult,
    quantize_money,
)
from src.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "CENT",
    "ZERO",
    "Transaction",
    "TransactionKind",
    "ValidationIssue",
    "ValidationResult",
    "quantize_money",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
