"""
Text rendering and input parsing for the console.

These helpers never touch the ledger; they turn user text into amounts
and transactions into lines.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from src.models.transaction import CENT, Transaction


TIMESTAMP_FORMAT = "%d %b %Y %H:%M:%S"
STATEMENT_HEADER = "Date\t\t\t| Amount\t| Balance"
EMPTY_STATEMENT = "No transactions to display."


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as e.g. '18 Oct 2026 15:05:01'."""
    return value.strftime(TIMESTAMP_FORMAT)


def format_money(value: Decimal) -> str:
    """Exactly two decimals, no grouping."""
    return f"{value.quantize(CENT, rounding=ROUND_HALF_UP):.2f}"


def parse_amount(text: Optional[str], currency_symbol: str = "$") -> Optional[Decimal]:
    """
    Parse an amount typed by the user.

    Strips whitespace and one leading currency symbol, then rounds half-up
    to cents. Returns None for anything that is not a finite amount
    greater than zero after rounding.
    """
    if text is None:
        return None
    cleaned = text.strip()
    if currency_symbol and cleaned.startswith(currency_symbol):
        cleaned = cleaned[len(currency_symbol):].strip()
    if not cleaned:
        return None

    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None

    try:
        value = value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None
    if value <= 0:
        return None
    return value


def render_statement(transactions: list[Transaction]) -> list[str]:
    """Statement table, one line per transaction, oldest first."""
    if not transactions:
        return [EMPTY_STATEMENT]

    lines = [STATEMENT_HEADER]
    for transaction in transactions:
        lines.append(
            f"{format_timestamp(transaction.timestamp)}\t"
            f"| {format_money(transaction.amount)}\t"
            f"| {format_money(transaction.balance_after)}"
        )
    return lines
