"""
Summary Aggregation

DESIGN DECISION: Dashboard totals are DERIVED, never stored.
Every read folds the full current transaction list into a ``Summary``.
The fold is pure: no I/O, no mutation, no errors. A missing or
unparseable amount counts as 0.

Amounts are summed as ``Decimal`` under an unbounded-precision context, so
every sum is exact and the result does not depend on the order of the input
list. Amounts whose magnitude lies outside 1e-64 to 1e64 count as 0.

Accepts ``Transaction`` models and raw row mappings alike.
"""

from collections.abc import Iterable, Mapping
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, localcontext
from typing import Any, Union

from finance_tracker.models.transaction import (
    LiabilityCategory,
    Summary,
    Transaction,
    TransactionType,
)
from finance_tracker.services.storage.codec import coerce_amount

TransactionLike = Union[Transaction, Mapping[str, Any]]

ZERO = Decimal("0")

MAX_AMOUNT_EXPONENT = 64

EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def _field(transaction: TransactionLike, name: str) -> Any:
    if isinstance(transaction, Mapping):
        return transaction.get(name)
    return getattr(transaction, name, None)


def _amount(transaction: TransactionLike) -> Decimal:
    amount = coerce_amount(_field(transaction, "amount"))
    if not amount.is_finite() or amount.is_zero():
        return ZERO
    if abs(amount.adjusted()) > MAX_AMOUNT_EXPONENT:
        return ZERO
    return amount


def calculate_summary(transactions: Iterable[TransactionLike]) -> Summary:
    """
    Fold transactions into income, expense, balance, debt and receivable.

    Liabilities move the balance and one liability total:
    Borrow (+balance, +debt), Repay (-balance, -debt),
    Lend (-balance, +receivable), Collect (+balance, -receivable).

    Debt and receivable are floored at zero after the fold, so repaying or
    collecting more than was recorded never shows a negative total.
    """
    income = ZERO
    expense = ZERO
    balance = ZERO
    debt = ZERO
    receivable = ZERO

    with localcontext(EXACT):
        for transaction in transactions:
            amount = _amount(transaction)
            transaction_type = _field(transaction, "type")
            category = _field(transaction, "category")

            if transaction_type == TransactionType.INCOME:
                income += amount
                balance += amount
            elif transaction_type == TransactionType.EXPENSE:
                expense += amount
                balance -= amount
            elif transaction_type == TransactionType.LIABILITY:
                if category == LiabilityCategory.BORROW:
                    balance += amount
                    debt += amount
                elif category == LiabilityCategory.REPAY:
                    balance -= amount
                    debt -= amount
                elif category == LiabilityCategory.LEND:
                    balance -= amount
                    receivable += amount
                elif category == LiabilityCategory.COLLECT:
                    balance += amount
                    receivable -= amount

    return Summary(
        total_income=income,
        total_expense=expense,
        balance=balance,
        total_debt=max(debt, ZERO),
        total_receivable=max(receivable, ZERO),
    )


def expenses_by_category(transactions: Iterable[TransactionLike]) -> dict[str, Decimal]:
    """Expense totals per category, in order of first appearance."""
    totals: dict[str, Decimal] = {}
    with localcontext(EXACT):
        for transaction in transactions:
            if _field(transaction, "type") != TransactionType.EXPENSE:
                continue
            category = str(_field(transaction, "category"))
            totals[category] = totals.get(category, ZERO) + _amount(transaction)
    return totals


def cash_direction(transaction: TransactionLike) -> int:
    """+1 when the transaction brings cash in, -1 when it takes cash out."""
    transaction_type = _field(transaction, "type")
    if transaction_type == TransactionType.INCOME:
        return 1
    if transaction_type == TransactionType.EXPENSE:
        return -1
    if _field(transaction, "category") in (
        LiabilityCategory.BORROW,
        LiabilityCategory.COLLECT,
    ):
        return 1
    return -1
