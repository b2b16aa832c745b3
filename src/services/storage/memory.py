"""In-memory ledger storage, used by tests and dry runs."""

from typing import Optional

from src.models.transaction import Transaction
from src.services.storage.interface import (
    LedgerStorageInterface,
    StorageError,
    StorageNotFoundError,
)


class InMemoryLedgerStorage(LedgerStorageInterface):
    """
    Keeps the last saved history in a list.

    Set fail_writes to make save() raise, which simulates a full disk.
    """

    def __init__(self, transactions: Optional[list[Transaction]] = None):
        self._transactions = list(transactions) if transactions is not None else None
        self.save_count = 0
        self.fail_writes = False

    @property
    def location(self) -> str:
        return "memory"

    def exists(self) -> bool:
        return self._transactions is not None

    def load(self) -> list[Transaction]:
        if self._transactions is None:
            raise StorageNotFoundError("Nothing saved in memory yet")
        return list(self._transactions)

    def save(self, transactions: list[Transaction]) -> None:
        if self.fail_writes:
            raise StorageError("Simulated write failure")
        self._transactions = list(transactions)
        self.save_count += 1
