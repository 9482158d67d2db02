"""
Validation Models

A form submission is checked before anything is sent to the store.
Errors block the submission; warnings are shown and the offending value is
dropped.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field

from finance_tracker.models.transaction import (
    ExpenseUpdate,
    IncomeUpdate,
    LiabilityUpdate,
    TransactionDraft,
)


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'not_applicable')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = None


class ValidationResult(BaseModel):
    """
    Result of validating a transaction form.

    When ``is_valid`` is True exactly one of ``draft`` (new transaction) or
    ``update`` (edit of an existing one) is populated.
    """

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)
    draft: Optional[TransactionDraft] = None
    update: Optional[Union[IncomeUpdate, ExpenseUpdate, LiabilityUpdate]] = None

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]
