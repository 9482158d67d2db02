"""
Data Models Package

This package contains all Pydantic models used in the Finance Tracker.
All data flowing between the UI, the store client and the aggregator must
conform to these schemas.
"""

from finance_tracker.models.transaction import (
    CATEGORIES_BY_TYPE,
    DEFAULT_CATEGORY,
    ExpenseCategory,
    ExpenseUpdate,
    IncomeSource,
    IncomeUpdate,
    LiabilityCategory,
    LiabilityUpdate,
    PaymentMethod,
    Summary,
    Transaction,
    TransactionDraft,
    TransactionType,
    TransactionUpdate,
    categories_for,
    is_valid_category,
)
from finance_tracker.models.user import AuthResult, User
from finance_tracker.models.validation import ValidationIssue, ValidationResult

__all__ = [
    # Transaction models
    "CATEGORIES_BY_TYPE",
    "DEFAULT_CATEGORY",
    "ExpenseCategory",
    "ExpenseUpdate",
    "IncomeSource",
    "IncomeUpdate",
    "LiabilityCategory",
    "LiabilityUpdate",
    "PaymentMethod",
    "Summary",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "TransactionUpdate",
    "categories_for",
    "is_valid_category",
    # User models
    "AuthResult",
    "User",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
