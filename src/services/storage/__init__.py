"""
Storage Services Package

Provides the abstract storage interface and its implementations.
The JSON file backend is the default; the in-memory backend is for tests.
"""

from src.services.storage.interface import (
    LedgerStorageInterface,
    StorageError,
    StorageNotFoundError,
    StorageUnreadableError,
)
from src.services.storage.json_file import JsonFileLedgerStorage
from src.services.storage.memory import InMemoryLedgerStorage

__all__ = [
    # Interface
    "LedgerStorageInterface",
    # Exceptions
    "StorageError",
    "StorageNotFoundError",
    "StorageUnreadableError",
    # Implementations
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
]
