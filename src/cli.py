"""
Personal Ledger CLI - root Click command group.

Registered in pyproject.toml as:

    [project.scripts]
    personal-ledger = "src.cli:cli"

Usage:
    personal-ledger                      interactive session
    personal-ledger statement            print the statement and exit
    personal-ledger verify               check the ledger file, exit 1 if bad
    personal-ledger --storage x.json ... use another ledger file
"""

from pathlib import Path
from typing import Optional

import click

from src.audit import configure_logging
from src.config import get_settings
from src.console import format_money, render_statement
from src.orchestrator import create_app_components, create_session, create_storage
from src.services.storage import StorageNotFoundError, StorageUnreadableError
from src.validation import HistoryValidator


@click.group(invoke_without_command=True)
@click.option(
    "--storage",
    "storage_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Ledger file to use instead of the configured one.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log audit events to stderr.")
@click.pass_context
def cli(ctx: click.Context, storage_path: Optional[Path], verbose: bool) -> None:
    """
    Personal Ledger: deposits, withdrawals and a statement for one account.

    \b
    Without a command, starts the interactive session.
    """
    app_settings = get_settings().app
    configure_logging("INFO" if verbose else app_settings.effective_log_level)

    ctx.ensure_object(dict)
    ctx.obj["storage_path"] = storage_path

    if ctx.invoked_subcommand is None:
        ledger, audit_logger = create_app_components(storage_path=storage_path)
        create_session(ledger, audit_logger).run()


@cli.command("statement")
@click.pass_context
def statement_command(ctx: click.Context) -> None:
    """Print the transaction statement and the current balance."""
    ledger, _ = create_app_components(storage_path=ctx.obj["storage_path"])
    if ledger.load_error is not None and not isinstance(
        ledger.load_error, StorageNotFoundError
    ):
        click.echo(f"Error reading saved records: {ledger.load_error}", err=True)

    for line in render_statement(ledger.history()):
        click.echo(line)
    currency = get_settings().app.currency_symbol
    click.echo(f"Current balance: {currency}{format_money(ledger.current_balance)}")


@cli.command("verify")
@click.pass_context
def verify_command(ctx: click.Context) -> None:
    """Check that the ledger file parses and its running balances add up."""
    storage = create_storage(ctx.obj["storage_path"])
    try:
        transactions = storage.load()
    except StorageNotFoundError:
        click.echo(f"No ledger file at {storage.location}.")
        return
    except StorageUnreadableError as e:
        click.echo(f"UNREADABLE: {e}", err=True)
        ctx.exit(1)

    result = HistoryValidator().validate(transactions)
    for issue in result.issues:
        click.echo(f"{issue.severity.upper()}: {issue.message}", err=True)

    if result.has_errors:
        click.echo(
            f"INVALID: {result.error_count} errors in "
            f"{result.transaction_count} transactions.",
            err=True,
        )
        ctx.exit(1)

    click.echo(f"OK: {result.transaction_count} transactions in {storage.location}.")
