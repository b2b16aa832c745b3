"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for ledger storage.
This allows us to:
1. Keep the ledger's invariants independent of the file format
2. Use in-memory storage for testing
3. Swap the JSON file for another local format later

The interface is intentionally small: the ledger always reads the whole
history once and always writes the whole history back.
"""

from abc import ABC, abstractmethod

from src.models.transaction import Transaction


class LedgerStorageInterface(ABC):
    """
    Abstract interface for transaction history storage.

    Implementations must make save() atomic from the caller's point of
    view: after a failed save the previous snapshot is still the one
    that load() returns.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where the history lives."""
        pass

    @abstractmethod
    def exists(self) -> bool:
        """Has a history ever been saved here?"""
        pass

    @abstractmethod
    def load(self) -> list[Transaction]:
        """
        Read the full transaction history.

        Returns:
            Transactions in chronological order

        Raises:
            StorageNotFoundError: If nothing has been saved yet
            StorageUnreadableError: If the stored data cannot be parsed
        """
        pass

    @abstractmethod
    def save(self, transactions: list[Transaction]) -> None:
        """
        Replace the stored history with the given sequence.

        Args:
            transactions: The complete history to store

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageUnreadableError(StorageError):
    """Stored history is missing, unparsable or does not match the schema."""
    pass


class StorageNotFoundError(StorageUnreadableError):
    """Nothing has been saved at the storage location yet."""
    pass
