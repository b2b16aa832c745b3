"""Validation package."""

from src.validation.validator import HistoryValidator, coerce_amount

__all__ = ["HistoryValidator", "coerce_amount"]
