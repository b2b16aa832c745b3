"""Exceptions raised by the ledger core.

Kept outside the ledger package so validation can raise them without
importing the ledger itself.
"""

from decimal import Decimal


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class InvalidAmountError(LedgerError):
    """Amount is not a finite, positive, two-decimal value."""

    def __init__(self, value, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid amount {value!r}: {reason}")


class InsufficientFundsError(LedgerError):
    """Withdrawal exceeds the current balance."""

    def __init__(self, requested: Decimal, available: Decimal):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient funds: requested {requested}, available {available}"
        )
