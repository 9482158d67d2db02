"""
Transaction Form Validation

Raw form input is checked BEFORE anything is sent to the store.

STAGE 1 - FIELD CHECKS:
- Type present and known
- Amount present, parseable and greater than zero
- Date parseable
- Category belongs to the type's enumeration
- Type-specific fields (payment method, person) on the right type

STAGE 2 - MODEL CONSTRUCTION:
- The cleaned values are handed to the pydantic models; anything the
  models still reject is reported as an issue rather than raised

IMPORTANT: Errors block submission and are shown to the user to correct.
Warnings are shown too, and the value they concern is dropped.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from finance_tracker.models.transaction import (
    PaymentMethod,
    TransactionDraft,
    TransactionType,
    TransactionUpdate,
    is_valid_category,
)
from finance_tracker.models.validation import ValidationIssue, ValidationResult

_update_adapter = TypeAdapter(TransactionUpdate)


class TransactionFormValidator:
    """
    Validates transaction form submissions.

    ``validate`` produces a ``TransactionDraft`` for new records,
    ``validate_update`` produces the update struct for edits.
    """

    def _check_fields(
        self,
        form: Mapping[str, Any],
    ) -> tuple[list[ValidationIssue], dict[str, Any]]:
        """
        Stage 1: field checks.

        Returns: (issues, cleaned_values)
        """
        issues = []
        values: dict[str, Any] = {}

        # Type
        try:
            transaction_type = TransactionType(form.get("type"))
            values["type"] = transaction_type
        except ValueError:
            issues.append(ValidationIssue(
                field="type",
                issue_type="invalid_value",
                message="Choose income, expense or liability",
                severity="error",
            ))
            return issues, values

        # Amount
        amount = self._parse_amount(form.get("amount"))
        if form.get("amount") in (None, ""):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                severity="error",
                suggested_fix="Please enter a valid amount",
            ))
        elif amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"Amount '{form.get('amount')}' is not a number",
                severity="error",
                suggested_fix="Please enter a valid amount",
            ))
        elif amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
                suggested_fix="Please enter a valid amount",
            ))
        else:
            values["amount"] = amount

        # Date
        raw_date = form.get("date")
        if isinstance(raw_date, date):
            values["date"] = raw_date
        else:
            try:
                values["date"] = date.fromisoformat(str(raw_date).strip())
            except ValueError:
                issues.append(ValidationIssue(
                    field="date",
                    issue_type="invalid_format",
                    message="Date must be a calendar day (YYYY-MM-DD)",
                    severity="error",
                ))

        # Category
        category = (form.get("category") or "").strip()
        if not is_valid_category(transaction_type, category):
            issues.append(ValidationIssue(
                field="category",
                issue_type="invalid_value",
                message=f"'{category}' is not a {transaction_type.value.lower()} category",
                severity="error",
            ))
        else:
            values["category"] = category

        # Payment method (expenses only)
        payment_method = form.get("payment_method") or form.get("paymentMethod")
        if payment_method:
            if transaction_type != TransactionType.EXPENSE:
                issues.append(ValidationIssue(
                    field="payment_method",
                    issue_type="not_applicable",
                    message="Payment method only applies to expenses and was ignored",
                    severity="warning",
                ))
            else:
                try:
                    values["payment_method"] = PaymentMethod(payment_method)
                except ValueError:
                    issues.append(ValidationIssue(
                        field="payment_method",
                        issue_type="invalid_value",
                        message=f"Unknown payment method '{payment_method}'",
                        severity="error",
                    ))

        # Person (liabilities only)
        person = (form.get("person") or "").strip()
        if person:
            if transaction_type != TransactionType.LIABILITY:
                issues.append(ValidationIssue(
                    field="person",
                    issue_type="not_applicable",
                    message="Person only applies to loans and was ignored",
                    severity="warning",
                ))
            else:
                values["person"] = person

        note = (form.get("note") or "").strip()
        values["note"] = note or None

        return issues, values

    def _parse_amount(self, raw: Any) -> Optional[Decimal]:
        if raw is None or isinstance(raw, bool):
            return None
        try:
            amount = Decimal(str(raw).strip())
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None

    def _model_issues(self, error: ValidationError) -> list[ValidationIssue]:
        """Stage 2 failures, one issue per pydantic error."""
        return [
            ValidationIssue(
                field=".".join(str(part) for part in err["loc"]) or "transaction",
                issue_type="invalid_value",
                message=err["msg"],
                severity="error",
            )
            for err in error.errors()
        ]

    def validate(self, form: Mapping[str, Any]) -> ValidationResult:
        """Validate a new-transaction form."""
        issues, values = self._check_fields(form)
        if any(issue.severity == "error" for issue in issues):
            return ValidationResult(is_valid=False, issues=issues)

        try:
            draft = TransactionDraft(**values)
        except ValidationError as e:
            return ValidationResult(is_valid=False, issues=issues + self._model_issues(e))

        return ValidationResult(is_valid=True, issues=issues, draft=draft)

    def validate_update(self, form: Mapping[str, Any]) -> ValidationResult:
        """
        Validate an edit form.

        The edit form carries every field of the record, so the same checks
        apply; the result is the update struct for the form's type.
        """
        issues, values = self._check_fields(form)
        if any(issue.severity == "error" for issue in issues):
            return ValidationResult(is_valid=False, issues=issues)

        values["type"] = values["type"].value
        if values["type"] == TransactionType.LIABILITY:
            values.setdefault("person", None)
        try:
            update = _update_adapter.validate_python(values)
        except ValidationError as e:
            return ValidationResult(is_valid=False, issues=issues + self._model_issues(e))

        return ValidationResult(is_valid=True, issues=issues, update=update)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Text shown under the form when submission is blocked or warned."""
        if result.is_valid and not result.warnings:
            return ""

        lines = []
        for issue in result.issues:
            if issue.severity == "error":
                lines.append(f"❌ {issue.message}")
                if issue.suggested_fix:
                    lines.append(f"   💡 {issue.suggested_fix}")
        for warning in result.warnings:
            lines.append(f"⚠️ {warning}")
        return "\n".join(lines)
