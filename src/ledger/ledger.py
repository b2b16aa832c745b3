"""
Ledger Core

Owns the balance and the append-only transaction history of one account,
and keeps storage in sync after every change.

INVARIANTS:
1. Every transaction's balance_after is the sum of its own amount and
   every earlier amount, starting from zero
2. current_balance is the last balance_after, or zero when empty
3. History is only ever appended to, never reordered or deleted
4. Storage and memory never disagree: a change is written first and
   only then committed in memory

Because of (1), reload restores the balance from the last entry alone.
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from src.audit import AuditLogger
from src.exceptions import InsufficientFundsError, InvalidAmountError
from src.models.transaction import MAX_MONEY, ZERO, Transaction
from src.services.storage import (
    LedgerStorageInterface,
    StorageError,
    StorageNotFoundError,
    StorageUnreadableError,
)
from src.validation import HistoryValidator, coerce_amount


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


class Ledger:
    """
    Balance and transaction history for a single account.

    The ledger hydrates itself from storage on construction. A missing or
    unreadable store never aborts startup: the ledger starts empty and
    remembers why in load_error.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[HistoryValidator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            storage: Where the history is read from and written to
            audit_logger: Receives an event for every change and rejection
            validator: Checks the stored history on load. If None, the
                       stored balances are trusted as-is.
            clock: Supplies transaction timestamps
        """
        self._storage = storage
        self._audit = audit_logger or AuditLogger()
        self._validator = validator
        self._clock = clock or _now
        self._transactions: list[Transaction] = []
        self._balance = ZERO
        self.load_error: Optional[StorageUnreadableError] = None
        self.load()

    @property
    def current_balance(self) -> Decimal:
        return self._balance

    @property
    def storage(self) -> LedgerStorageInterface:
        return self._storage

    def __len__(self) -> int:
        return len(self._transactions)

    def history(self) -> list[Transaction]:
        """Snapshot of all transactions, oldest first."""
        return list(self._transactions)

    def load(self) -> None:
        """
        Hydrate from storage.

        Falls back to an empty ledger when storage is missing, unreadable,
        or (with a validator) fails the running-balance check.
        """
        self._transactions = []
        self._balance = ZERO
        self.load_error = None

        try:
            transactions = self._storage.load()
            if self._validator is not None:
                result = self._validator.validate(transactions)
                if result.has_errors:
                    self._audit.log_history_validation_failed(
                        location=self._storage.location,
                        issues=[issue.model_dump() for issue in result.issues],
                    )
                    raise StorageUnreadableError(
                        f"Stored history is inconsistent: {result.summary()}"
                    )
        except StorageNotFoundError as e:
            self.load_error = e
            self._audit.log_storage_not_found(self._storage.location)
            return
        except StorageUnreadableError as e:
            self.load_error = e
            self._audit.log_storage_unreadable(self._storage.location, str(e))
            return

        self._transactions = transactions
        if transactions:
            self._balance = transactions[-1].balance_after
        self._audit.log_ledger_loaded(
            location=self._storage.location,
            transaction_count=len(transactions),
            balance=self._balance,
        )

    def persist(self) -> None:
        """Write the full history to storage."""
        self._save(self._transactions)

    def deposit(self, amount) -> Transaction:
        """
        Add money to the account.

        Raises:
            InvalidAmountError: If amount is not a finite positive value
                                or would take the balance to MAX_MONEY
            StorageError: If the history could not be written; the
                          ledger is left unchanged
        """
        value = self._validate_amount("deposit", amount)
        if self._balance + value >= MAX_MONEY:
            reason = "balance would exceed the maximum account balance"
            self._audit.log_invalid_amount("deposit", amount, reason)
            raise InvalidAmountError(amount, reason)
        transaction = Transaction(
            timestamp=self._clock(),
            amount=value,
            balance_after=self._balance + value,
        )
        self._append(transaction)
        self._audit.log_deposit(value, transaction.balance_after)
        return transaction

    def withdraw(self, amount) -> Transaction:
        """
        Take money out of the account.

        The recorded transaction carries the negated amount.

        Raises:
            InvalidAmountError: If amount is not a finite positive value
            InsufficientFundsError: If amount exceeds the current balance
            StorageError: If the history could not be written
        """
        value = self._validate_amount("withdraw", amount)
        if value > self._balance:
            self._audit.log_insufficient_funds(value, self._balance)
            raise InsufficientFundsError(requested=value, available=self._balance)

        transaction = Transaction(
            timestamp=self._clock(),
            amount=-value,
            balance_after=self._balance - value,
        )
        self._append(transaction)
        self._audit.log_withdrawal(value, transaction.balance_after)
        return transaction

    def _validate_amount(self, operation: str, amount) -> Decimal:
        try:
            return coerce_amount(amount)
        except InvalidAmountError as e:
            self._audit.log_invalid_amount(operation, amount, e.reason)
            raise

    def _append(self, transaction: Transaction) -> None:
        candidate = [*self._transactions, transaction]
        self._save(candidate)
        self._transactions = candidate
        self._balance = transaction.balance_after

    def _save(self, transactions: list[Transaction]) -> None:
        try:
            self._storage.save(transactions)
        except StorageError as e:
            self._audit.log_persist_failed(self._storage.location, str(e))
            raise
