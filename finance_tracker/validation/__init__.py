"""Form validation package."""

from finance_tracker.validation.validator import TransactionFormValidator

__all__ = ["TransactionFormValidator"]
