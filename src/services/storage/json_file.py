"""
JSON File Storage Implementation

DESIGN DECISION: The history is a single JSON array in a local file because:
1. The user can open and read their records directly
2. No database setup required
3. The whole history is rewritten on every change, so the file is
   always one complete snapshot

Each record is {"date": "...", "amount": 100.0, "balance": 100.0}.

TRADEOFFS:
- Rewriting the whole file is O(n) per mutation (fine for one account)
- Floats are written, so values are limited to two decimal places
  below MAX_MONEY, which is exactly what the ledger accepts

Writes go to a temporary file in the same directory which is then
renamed over the target, so an interrupted write never leaves a
truncated history behind.
"""

import json
import os
import tempfile
from decimal import Decimal
from pathlib import Path
from typing import Union

import structlog
from pydantic import ValidationError
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.models.transaction import Transaction
from src.services.storage.interface import (
    LedgerStorageInterface,
    StorageError,
    StorageNotFoundError,
    StorageUnreadableError,
)


logger = structlog.get_logger(__name__)


class JsonFileLedgerStorage(LedgerStorageInterface):
    """
    Stores the transaction history as a JSON array in a single file.
    """

    def __init__(
        self,
        path: Union[str, Path],
        write_attempts: int = 3,
    ):
        self._path = Path(path)
        self._write_attempts = write_attempts

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> list[Transaction]:
        """Read and parse the whole history file."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise StorageNotFoundError(f"No ledger file at {self._path}")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnreadableError(f"Cannot read {self._path}: {e}") from e

        try:
            records = json.loads(raw, parse_float=Decimal)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError, oversized integers and runaway nesting
            raise StorageUnreadableError(f"{self._path} is not valid JSON: {e}") from e

        if not isinstance(records, list):
            raise StorageUnreadableError(
                f"{self._path} must hold a list of transactions, "
                f"found {type(records).__name__}"
            )

        transactions = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise StorageUnreadableError(
                    f"Record {index} in {self._path} is not an object"
                )
            try:
                transactions.append(Transaction.from_record(record))
            except KeyError as e:
                raise StorageUnreadableError(
                    f"Record {index} in {self._path} is missing field {e}"
                ) from e
            except ValidationError as e:
                raise StorageUnreadableError(
                    f"Record {index} in {self._path} is malformed: "
                    f"{e.error_count()} invalid fields"
                ) from e

        return transactions

    def save(self, transactions: list[Transaction]) -> None:
        """Serialize the full history and atomically replace the file."""
        payload = json.dumps(
            [transaction.to_record() for transaction in transactions],
            indent=2,
        )
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self._write_attempts),
                wait=wait_exponential(multiplier=0.1, max=1),
                retry=retry_if_exception_type(OSError),
                reraise=True,
            ):
                with attempt:
                    self._write_atomic(payload)
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e

        logger.debug(
            "ledger_file_written",
            path=str(self._path),
            transaction_count=len(transactions),
        )

    def _write_atomic(self, payload: str) -> None:
        """Write to a sibling temp file, fsync, then rename over the target."""
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, temp_name = tempfile.mkstemp(
            dir=directory,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, self._path)
        except BaseException:
            try:
                os.unlink(temp_name)
            except FileNotFoundError:
                pass
            raise
