"""Console package: the interactive command interface."""

from src.console.formatting import (
    format_money,
    format_timestamp,
    parse_amount,
    render_statement,
)
from src.console.input import ConsoleInput, InputSource, ScriptedInput
from src.console.session import BankingSession

__all__ = [
    "BankingSession",
    "ConsoleInput",
    "InputSource",
    "ScriptedInput",
    "format_money",
    "format_timestamp",
    "parse_amount",
    "render_statement",
]
