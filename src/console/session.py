"""
Interactive Banking Session

The D/W/P/Q command loop. It translates user input into ledger calls and
renders the results as text.

BOUNDARIES:
- Input is validated here before the ledger is called; the ledger still
  validates again
- Ledger errors are mapped to plain messages; nothing here crashes the loop
- Quitting (or running out of input) makes no further ledger calls
"""

from typing import Callable, Optional

import click

from src.audit import AuditLogger
from src.console.formatting import format_money, parse_amount, render_statement
from src.console.input import ConsoleInput, InputSource
from src.exceptions import InsufficientFundsError, InvalidAmountError
from src.ledger import Ledger
from src.services.storage import StorageError, StorageNotFoundError


MENU = (
    "[D]eposit",
    "[W]ithdraw",
    "[P]rint statement",
    "[Q]uit",
)
ANYTHING_ELSE = "Is there anything else you'd like to do?"
INVALID_AMOUNT = "Invalid amount. Please try again."
INVALID_CHOICE = "Invalid choice. Please try again."
INSUFFICIENT_FUNDS = "Insufficient funds."


class BankingSession:
    """Runs the interactive loop against one Ledger."""

    def __init__(
        self,
        ledger: Ledger,
        input_source: Optional[InputSource] = None,
        echo: Callable[[str], None] = click.echo,
        bank_name: str = "AwesomeGIC Bank",
        currency_symbol: str = "$",
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._ledger = ledger
        self._input = input_source or ConsoleInput()
        self._echo = echo
        self._bank_name = bank_name
        self._currency = currency_symbol
        self._audit = audit_logger

    def run(self) -> None:
        if self._audit:
            self._audit.log_session_started(self._bank_name)

        self._report_load_error()
        self._echo(f"Welcome to {self._bank_name}! What would you like to do?")

        reason = "end_of_input"
        while True:
            self._show_menu()
            choice = self._input.read("Enter your choice: ")
            if choice is None:
                self._say_goodbye()
                break

            action = choice.strip().upper()
            if action == "D":
                self._deposit()
            elif action == "W":
                self._withdraw()
            elif action == "P":
                self._print_statement()
            elif action == "Q":
                reason = "quit"
                self._say_goodbye()
                break
            else:
                self._echo(INVALID_CHOICE)

        if self._audit:
            self._audit.log_session_ended(reason)

    def _report_load_error(self) -> None:
        error = self._ledger.load_error
        if error is None or isinstance(error, StorageNotFoundError):
            return
        self._echo(f"Error reading saved records: {error}")
        self._echo("Starting with an empty account.")

    def _show_menu(self) -> None:
        for line in MENU:
            self._echo(line)

    def _say_goodbye(self) -> None:
        self._echo(f"Thank you for banking with {self._bank_name}.")
        self._echo("Have a nice day!")

    def _read_amount(self, prompt: str):
        return parse_amount(self._input.read(prompt), self._currency)

    def _deposit(self) -> None:
        amount = self._read_amount("Please enter the amount to deposit: ")
        if amount is None:
            self._echo(INVALID_AMOUNT)
            return

        try:
            self._ledger.deposit(amount)
        except InvalidAmountError:
            self._echo(INVALID_AMOUNT)
            return
        except StorageError as e:
            self._echo(f"Could not save your transaction: {e}")
            return

        self._echo(
            f"Thank you. {self._currency}{format_money(amount)} "
            "has been deposited to your account."
        )
        self._echo(ANYTHING_ELSE)

    def _withdraw(self) -> None:
        amount = self._read_amount("Please enter the amount to withdraw: ")
        if amount is None:
            self._echo(INVALID_AMOUNT)
            return

        try:
            self._ledger.withdraw(amount)
        except InvalidAmountError:
            self._echo(INVALID_AMOUNT)
            return
        except InsufficientFundsError:
            self._echo(INSUFFICIENT_FUNDS)
        except StorageError as e:
            self._echo(f"Could not save your transaction: {e}")
            return
        else:
            self._echo(
                f"Thank you. {self._currency}{format_money(amount)} has been withdrawn."
            )
        self._echo(ANYTHING_ELSE)

    def _print_statement(self) -> None:
        for line in render_statement(self._ledger.history()):
            self._echo(line)
        self._echo(ANYTHING_ELSE)
