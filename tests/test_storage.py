"""Tests for the JSON file and in-memory storage backends."""

import json
import os
from datetime import datetime
from decimal import Decimal

import pytest

from src.models.transaction import Transaction
from src.services.storage import (
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    StorageError,
    StorageNotFoundError,
    StorageUnreadableError,
)


@pytest.fixture
def history():
    return [
        Transaction(
            timestamp=datetime(2024, 5, 2, 14, 3, 9),
            amount=Decimal("100.00"),
            balance_after=Decimal("100.00"),
        ),
        Transaction(
            timestamp=datetime(2024, 5, 2, 14, 5, 0),
            amount=Decimal("-30.10"),
            balance_after=Decimal("69.90"),
        ),
    ]


class TestJsonFileFormat:
    """Tests for the on-disk record shape."""

    def test_records_have_date_amount_balance(self, file_storage, ledger_path, history):
        """Test each record is {date, amount, balance} with numeric money."""
        file_storage.save(history)
        records = json.loads(ledger_path.read_text(encoding="utf-8"))

        assert records == [
            {"date": "2024-05-02T14:03:09", "amount": 100.0, "balance": 100.0},
            {"date": "2024-05-02T14:05:00", "amount": -30.1, "balance": 69.9},
        ]

    def test_file_is_pretty_printed(self, file_storage, ledger_path, history):
        """Test the file is indented so users can read it."""
        file_storage.save(history)
        assert '\n  {\n    "date"' in ledger_path.read_text(encoding="utf-8")

    def test_round_trip(self, file_storage, history):
        """Test save then load returns equal transactions."""
        file_storage.save(history)
        assert file_storage.load() == history

    def test_amounts_load_as_exact_decimals(self, file_storage, ledger_path):
        """Test two-decimal values are not distorted by float parsing."""
        ledger_path.write_text(
            '[{"date": "2024-01-01T00:00:00", "amount": 0.1, "balance": 0.1},'
            ' {"date": "2024-01-01T00:00:01", "amount": 0.2, "balance": 0.3}]',
            encoding="utf-8",
        )
        loaded = file_storage.load()
        assert loaded[1].balance_after == Decimal("0.30")
        assert loaded[0].amount + loaded[1].amount == loaded[1].balance_after

    def test_large_values_round_trip(self, file_storage):
        """Test values just under the money limit survive the float encoding."""
        history = [
            Transaction(
                timestamp=datetime(2024, 5, 2, 14, 3, 9),
                amount=Decimal("9999999999999.99"),
                balance_after=Decimal("9999999999999.99"),
            ),
            Transaction(
                timestamp=datetime(2024, 5, 2, 14, 4, 0),
                amount=Decimal("-1234567890123.45"),
                balance_after=Decimal("8765432109876.54"),
            ),
        ]
        file_storage.save(history)
        assert file_storage.load() == history

    def test_integer_amounts_accepted(self, file_storage, ledger_path):
        """Test whole numbers without a decimal point load fine."""
        ledger_path.write_text(
            '[{"date": "2024-01-01T00:00:00", "amount": 70, "balance": 70}]',
            encoding="utf-8",
        )
        assert file_storage.load()[0].balance_after == Decimal("70.00")

    def test_empty_history(self, file_storage):
        """Test an empty history is saved as an empty list."""
        file_storage.save([])
        assert file_storage.load() == []
        assert file_storage.exists()


class TestJsonFileErrors:
    """Tests for unreadable and unwritable files."""

    def test_missing_file(self, file_storage):
        """Test a missing file raises StorageNotFoundError."""
        assert not file_storage.exists()
        with pytest.raises(StorageNotFoundError):
            file_storage.load()

    def test_not_found_is_unreadable(self):
        """Test callers can catch both cases with StorageUnreadableError."""
        assert issubclass(StorageNotFoundError, StorageUnreadableError)
        assert issubclass(StorageUnreadableError, StorageError)

    def test_invalid_json(self, file_storage, ledger_path):
        """Test a truncated file raises StorageUnreadableError."""
        ledger_path.write_text('[{"date": "2024-01-01T00:00:00", "amo', encoding="utf-8")
        with pytest.raises(StorageUnreadableError, match="not valid JSON"):
            file_storage.load()

    def test_wrong_top_level_type(self, file_storage, ledger_path):
        """Test an object instead of a list is rejected."""
        ledger_path.write_text('{"balance": 10}', encoding="utf-8")
        with pytest.raises(StorageUnreadableError, match="list of transactions"):
            file_storage.load()

    def test_missing_field(self, file_storage, ledger_path):
        """Test a record without balance is rejected."""
        ledger_path.write_text('[{"date": "2024-01-01T00:00:00", "amount": 1}]', encoding="utf-8")
        with pytest.raises(StorageUnreadableError, match="missing field"):
            file_storage.load()

    def test_zero_amount_record(self, file_storage, ledger_path):
        """Test a stored zero amount is a schema mismatch."""
        ledger_path.write_text(
            '[{"date": "2024-01-01T00:00:00", "amount": 0, "balance": 0}]',
            encoding="utf-8",
        )
        with pytest.raises(StorageUnreadableError, match="malformed"):
            file_storage.load()

    def test_sub_cent_record(self, file_storage, ledger_path):
        """Test more than two decimal places is a schema mismatch."""
        ledger_path.write_text(
            '[{"date": "2024-01-01T00:00:00", "amount": 1.005, "balance": 1.005}]',
            encoding="utf-8",
        )
        with pytest.raises(StorageUnreadableError):
            file_storage.load()

    def test_deeply_nested_json(self, file_storage, ledger_path):
        """Test runaway nesting is reported as unreadable."""
        ledger_path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
        with pytest.raises(StorageUnreadableError, match="not valid JSON"):
            file_storage.load()

    def test_oversized_integer(self, file_storage, ledger_path):
        """Test an integer too long to convert is reported as unreadable."""
        ledger_path.write_text(
            '[{"date": "2024-01-01T00:00:00", "amount": ' + "9" * 5000 + ', "balance": 1}]',
            encoding="utf-8",
        )
        with pytest.raises(StorageUnreadableError, match="not valid JSON"):
            file_storage.load()

    def test_amount_over_limit(self, file_storage, ledger_path):
        """Test a stored amount at or above the money limit is malformed."""
        ledger_path.write_text(
            '[{"date": "2024-01-01T00:00:00", "amount": 10000000000000, "balance": 10000000000000}]',
            encoding="utf-8",
        )
        with pytest.raises(StorageUnreadableError, match="malformed"):
            file_storage.load()

    def test_date_with_utc_offset(self, file_storage, ledger_path):
        """Test offset-dated records are rejected so dates stay comparable."""
        ledger_path.write_text(
            '[{"date": "2024-01-01T00:00:00+00:00", "amount": 10, "balance": 10},'
            ' {"date": "2024-01-02T00:00:00", "amount": 5, "balance": 15}]',
            encoding="utf-8",
        )
        with pytest.raises(StorageUnreadableError, match="Record 0 .* malformed"):
            file_storage.load()

    def test_write_failure_raises_storage_error(self, tmp_path, history):
        """Test a path that cannot be replaced surfaces as StorageError."""
        target = tmp_path / "occupied"
        target.mkdir()
        storage = JsonFileLedgerStorage(target, write_attempts=1)

        with pytest.raises(StorageError):
            storage.save(history)
        assert list(tmp_path.glob(".occupied.*.tmp")) == []


class TestAtomicWrites:
    """Tests that writes replace the file as a whole."""

    def test_no_temp_files_left_behind(self, file_storage, tmp_path, history):
        """Test the temp file is renamed away after a write."""
        file_storage.save(history)
        file_storage.save(history[:1])
        assert sorted(p.name for p in tmp_path.iterdir()) == ["bank_records.json"]

    def test_save_overwrites_previous_contents(self, file_storage, history):
        """Test the file holds only the latest snapshot."""
        file_storage.save(history)
        file_storage.save(history[:1])
        assert file_storage.load() == history[:1]

    def test_failed_replace_keeps_old_snapshot(self, file_storage, ledger_path, history, monkeypatch):
        """Test an interrupted write leaves the previous file intact."""
        file_storage.save(history[:1])
        before = ledger_path.read_text(encoding="utf-8")

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", broken_replace)
        storage = JsonFileLedgerStorage(ledger_path, write_attempts=2)
        with pytest.raises(StorageError, match="disk full"):
            storage.save(history)

        assert ledger_path.read_text(encoding="utf-8") == before
        assert [p.name for p in ledger_path.parent.iterdir()] == ["bank_records.json"]

    def test_transient_failure_is_retried(self, file_storage, ledger_path, history, monkeypatch):
        """Test a single failed rename is retried and the write succeeds."""
        real_replace = os.replace
        calls = {"count": 0}

        def flaky_replace(src, dst):
            calls["count"] += 1
            if calls["count"] == 1:
                raise OSError("temporarily locked")
            real_replace(src, dst)

        monkeypatch.setattr(os, "replace", flaky_replace)
        file_storage.save(history)

        assert calls["count"] == 2
        assert file_storage.load() == history

    def test_creates_parent_directories(self, tmp_path, history):
        """Test saving into a directory that does not exist yet."""
        storage = JsonFileLedgerStorage(tmp_path / "data" / "ledger.json")
        storage.save(history)
        assert storage.load() == history


class TestInMemoryStorage:
    """Tests for the in-memory backend."""

    def test_empty_until_saved(self):
        """Test nothing is found before the first save."""
        storage = InMemoryLedgerStorage()
        assert not storage.exists()
        with pytest.raises(StorageNotFoundError):
            storage.load()

    def test_save_and_load(self, history):
        """Test saved histories come back as copies."""
        storage = InMemoryLedgerStorage()
        storage.save(history)
        loaded = storage.load()
        loaded.clear()
        assert storage.load() == history
        assert storage.save_count == 1

    def test_simulated_failure(self, history):
        """Test fail_writes makes save raise."""
        storage = InMemoryLedgerStorage()
        storage.fail_writes = True
        with pytest.raises(StorageError):
            storage.save(history)
        assert not storage.exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
