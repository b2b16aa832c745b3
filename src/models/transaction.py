"""
Core Data Models for Personal Ledger

These models define the strict schemas for the ledger's history.
They are designed to:
1. Enforce type safety at runtime
2. Be immutable once recorded
3. Be serializable for storage and logging

DESIGN DECISION: Money is always Decimal with at most two places and a
magnitude below MAX_MONEY. Floats only appear at the storage boundary,
and a two-decimal value under that limit has at most 15 significant
digits, so it survives the round trip through a float exactly.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


CENT = Decimal("0.01")
ZERO = Decimal("0.00")
MAX_MONEY = Decimal("10000000000000")


def quantize_money(value: Decimal) -> Decimal:
    """Normalize a decimal amount to exactly two places."""
    if not value.is_finite() or abs(value) >= MAX_MONEY:
        raise ValueError(f"{value} is out of range for a money amount")
    return value.quantize(CENT)


# =============================================================================
# ENUMS
# =============================================================================

class TransactionKind(str, Enum):
    """Direction of a transaction, derived from the sign of its amount."""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


# =============================================================================
# TRANSACTION
# =============================================================================

class Transaction(BaseModel):
    """
    One recorded deposit or withdrawal.

    CRITICAL: balance_after is the running balance immediately after this
    transaction. The ledger relies on it to restore the balance on reload
    without re-summing the history.
    """
    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(
        ...,
        description="When the transaction was recorded (second precision)"
    )
    amount: Decimal = Field(
        ...,
        decimal_places=2,
        description="Signed amount: positive for deposits, negative for withdrawals"
    )
    balance_after: Decimal = Field(
        ...,
        decimal_places=2,
        description="Running balance after this transaction"
    )

    @field_validator('timestamp')
    @classmethod
    def truncate_to_seconds(cls, v: datetime) -> datetime:
        """Timestamps are naive local time, like the ledger clock."""
        if v.tzinfo is not None:
            raise ValueError("Transaction timestamp must not carry a UTC offset")
        return v.replace(microsecond=0)

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        """A transaction must move money."""
        if v == 0:
            raise ValueError("Transaction amount cannot be zero")
        return quantize_money(v)

    @field_validator('balance_after')
    @classmethod
    def normalize_balance(cls, v: Decimal) -> Decimal:
        return quantize_money(v)

    @property
    def kind(self) -> TransactionKind:
        if self.amount > 0:
            return TransactionKind.DEPOSIT
        return TransactionKind.WITHDRAWAL

    def to_record(self) -> dict[str, Any]:
        """
        Convert to the persisted record shape.

        Returns {"date": ISO-8601 string, "amount": number, "balance": number}.
        """
        return {
            "date": self.timestamp.isoformat(timespec="seconds"),
            "amount": float(self.amount),
            "balance": float(self.balance_after),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Transaction":
        """
        Build a Transaction from a persisted record.

        Raises KeyError for a missing field and pydantic's ValidationError
        for a field with the wrong shape.
        """
        return cls(
            timestamp=record["date"],
            amount=record["amount"],
            balance_after=record["balance"],
        )


# =============================================================================
# VALIDATION RESULTS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in a stored history."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    index: Optional[int] = Field(
        default=None,
        ge=0,
        description="Position of the offending transaction in the history"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'zero_amount', 'balance_mismatch')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """Result of checking a transaction history against the running-balance rule."""

    validated_at: datetime = Field(
        default_factory=datetime.now
    )
    transaction_count: int = Field(
        ...,
        ge=0,
        description="How many transactions were checked"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All issues found"
    )

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]

    def summary(self) -> str:
        """One line per error, for diagnostics."""
        return "; ".join(
            issue.message for issue in self.issues if issue.severity == "error"
        )
