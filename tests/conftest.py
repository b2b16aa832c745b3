"""Shared fixtures for the ledger tests."""

from datetime import datetime, timedelta

import pytest

from src.audit import AuditLogger
from src.config import get_settings
from src.ledger import Ledger
from src.services.storage import InMemoryLedgerStorage, JsonFileLedgerStorage
from src.validation import HistoryValidator


class FakeClock:
    """Returns a fixed start time, advancing one minute per call."""

    def __init__(self, start: datetime = datetime(2024, 3, 1, 9, 30, 0)):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(minutes=1)
        return value


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests away from a developer's .env and environment."""
    for name in (
        "LEDGER_STORAGE_PATH",
        "LEDGER_STORAGE_VALIDATE_ON_LOAD",
        "LEDGER_STORAGE_WRITE_ATTEMPTS",
        "BANK_NAME",
        "CURRENCY_SYMBOL",
        "LOG_LEVEL",
        "DEBUG_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def ledger_path(tmp_path):
    return tmp_path / "bank_records.json"


@pytest.fixture
def file_storage(ledger_path):
    return JsonFileLedgerStorage(ledger_path)


@pytest.fixture
def memory_storage():
    return InMemoryLedgerStorage()


@pytest.fixture
def make_ledger(clock, audit_logger):
    """Build a ledger over the given storage with the shared clock."""
    def _make(storage, validate: bool = True):
        return Ledger(
            storage=storage,
            audit_logger=audit_logger,
            validator=HistoryValidator() if validate else None,
            clock=clock,
        )
    return _make
