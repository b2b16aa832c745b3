"""Ledger package.

Public API:
- Ledger: balance, append-only history, persistence after every change.
"""

from src.exceptions import InsufficientFundsError, InvalidAmountError, LedgerError
from src.ledger.ledger import Ledger

__all__ = [
    "InsufficientFundsError",
    "InvalidAmountError",
    "Ledger",
    "LedgerError",
]
