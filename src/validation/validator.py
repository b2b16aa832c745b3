"""
Amount and History Validation

DESIGN DECISION: Validation happens at two boundaries.

AMOUNT VALIDATION (every deposit/withdrawal):
- Type checking (no booleans, no junk text)
- Finite values only
- At most two decimal places
- Strictly positive and below MAX_MONEY
This keeps the core from ever recording a zero, negative or
unrepresentable amount, whatever the caller passes in.

HISTORY VALIDATION (once, at load time):
- Every balance_after equals the previous balance plus the amount
- No balance is negative
- Timestamps never go backwards (warning only, clocks drift)
The ledger restores its balance from the last entry alone, which is only
correct if the whole history obeys the running-balance rule.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the caller can decide.
"""

from decimal import Decimal, InvalidOperation

from src.exceptions import InvalidAmountError
from src.models.transaction import (
    CENT,
    MAX_MONEY,
    ZERO,
    Transaction,
    ValidationIssue,
    ValidationResult,
)


def coerce_amount(value) -> Decimal:
    """
    Convert a caller-supplied amount to a validated Decimal.

    Accepts Decimal, int, float and numeric strings. Floats go through
    their text form so 0.1 becomes Decimal("0.1"), not the binary value.

    Raises:
        InvalidAmountError: If the value is not a finite, positive amount
                            with at most two decimal places
    """
    if isinstance(value, bool):
        raise InvalidAmountError(value, "amount must be a number")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidAmountError(value, "amount must be a number")
    else:
        raise InvalidAmountError(value, "amount must be a number")

    if not amount.is_finite():
        raise InvalidAmountError(value, "amount must be finite")
    if amount <= 0:
        raise InvalidAmountError(value, "amount must be greater than zero")
    if amount >= MAX_MONEY:
        raise InvalidAmountError(value, "amount is too large")
    quantized = amount.quantize(CENT)
    if amount != quantized:
        raise InvalidAmountError(value, "amount cannot have more than two decimal places")

    return quantized


class HistoryValidator:
    """Checks a stored history against the running-balance invariant."""

    def validate(self, transactions: list[Transaction]) -> ValidationResult:
        issues = []
        running = ZERO
        previous = None

        for index, transaction in enumerate(transactions):
            running += transaction.amount
            if transaction.balance_after != running:
                issues.append(ValidationIssue(
                    field="balance",
                    index=index,
                    issue_type="balance_mismatch",
                    message=(
                        f"Transaction {index} records balance {transaction.balance_after} "
                        f"but the amounts add up to {running}"
                    ),
                    severity="error",
                    suggested_fix="Restore the ledger file from a backup",
                ))
                # Keep checking against what the file claims
                running = transaction.balance_after

            if transaction.balance_after < 0:
                issues.append(ValidationIssue(
                    field="balance",
                    index=index,
                    issue_type="negative_balance",
                    message=f"Transaction {index} leaves a negative balance",
                    severity="error",
                ))

            if previous is not None and transaction.timestamp < previous.timestamp:
                issues.append(ValidationIssue(
                    field="date",
                    index=index,
                    issue_type="out_of_order",
                    message=f"Transaction {index} is dated before transaction {index - 1}",
                    severity="warning",
                ))

            previous = transaction

        return ValidationResult(
            transaction_count=len(transactions),
            issues=issues,
        )
