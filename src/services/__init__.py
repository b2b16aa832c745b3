"""Services package."""

from src.services.storage import (
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    StorageError,
    StorageNotFoundError,
    StorageUnreadableError,
)

__all__ = [
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    "LedgerStorageInterface",
    "StorageError",
    "StorageNotFoundError",
    "StorageUnreadableError",
]
