"""
Main Orchestrator for Personal Ledger

This module ties together all the components:
settings -> storage -> audit logger -> ledger -> session.

DESIGN DECISION: There is no process-wide ledger singleton.
The ledger is built here, explicitly, and handed to whoever needs it
(the interactive session or a one-shot CLI command).
"""

from pathlib import Path
from typing import Optional, Union

from src.audit import AuditLogger, create_correlation_id
from src.config import Settings, get_settings
from src.console import BankingSession, InputSource
from src.ledger import Ledger
from src.services.storage import JsonFileLedgerStorage, LedgerStorageInterface
from src.validation import HistoryValidator


def create_storage(
    storage_path: Optional[Union[str, Path]] = None,
    settings: Optional[Settings] = None,
) -> JsonFileLedgerStorage:
    """Build the JSON file storage, with an optional path override."""
    storage_settings = (settings or get_settings()).storage
    return JsonFileLedgerStorage(
        path=storage_path or storage_settings.path,
        write_attempts=storage_settings.write_attempts,
    )


def create_app_components(
    storage_path: Optional[Union[str, Path]] = None,
    storage: Optional[LedgerStorageInterface] = None,
    settings: Optional[Settings] = None,
) -> tuple[Ledger, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        storage_path: Overrides the configured ledger file
        storage: Use this storage instead of the JSON file
                 (e.g. InMemoryLedgerStorage in tests)
        settings: Defaults to the cached application settings

    Returns:
        (ledger, audit_logger)
    """
    settings = settings or get_settings()
    audit_logger = AuditLogger(correlation_id=create_correlation_id())

    if storage is None:
        storage = create_storage(storage_path, settings)

    validator = HistoryValidator() if settings.storage.validate_on_load else None
    ledger = Ledger(
        storage=storage,
        audit_logger=audit_logger,
        validator=validator,
    )

    return ledger, audit_logger


def create_session(
    ledger: Ledger,
    audit_logger: Optional[AuditLogger] = None,
    input_source: Optional[InputSource] = None,
    settings: Optional[Settings] = None,
    **kwargs,
) -> BankingSession:
    """Build an interactive session over an existing ledger."""
    app_settings = (settings or get_settings()).app
    return BankingSession(
        ledger=ledger,
        input_source=input_source,
        bank_name=app_settings.bank_name,
        currency_symbol=app_settings.currency_symbol,
        audit_logger=audit_logger,
        **kwargs,
    )
