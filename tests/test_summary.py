"""Tests for dashboard aggregation."""

import itertools
from datetime import date
from decimal import Decimal

from finance_tracker.models.transaction import Transaction, TransactionType
from finance_tracker.queries.summary import (
    calculate_summary,
    cash_direction,
    expenses_by_category,
)
from finance_tracker.services.storage.codec import encode
from finance_tracker.services.transactions import row_to_transaction, transaction_to_payload


def make(type_, category, amount, **kwargs):
    return Transaction(
        date=kwargs.pop("date", date(2024, 1, 1)),
        type=type_,
        category=category,
        amount=Decimal(str(amount)),
        **kwargs,
    )


SAMPLE = [
    make(TransactionType.INCOME, "Salary", 1000),
    make(TransactionType.EXPENSE, "Food", 300),
    make(TransactionType.LIABILITY, "Borrow", 500, person="Alice"),
    make(TransactionType.LIABILITY, "Repay", 200, person="Alice"),
]


class TestCalculateSummary:
    """Tests for the summary fold."""

    def test_example_set(self):
        summary = calculate_summary(SAMPLE)
        assert summary.total_income == Decimal("1000")
        assert summary.total_expense == Decimal("300")
        assert summary.balance == Decimal("1000")
        assert summary.total_debt == Decimal("300")
        assert summary.total_receivable == Decimal("0")

    def test_empty_list(self):
        summary = calculate_summary([])
        assert summary.balance == 0
        assert summary.total_income == 0

    def test_lend_and_collect(self):
        summary = calculate_summary([
            make(TransactionType.LIABILITY, "Lend", 400),
            make(TransactionType.LIABILITY, "Collect", 150),
        ])
        assert summary.balance == Decimal("-250")
        assert summary.total_receivable == Decimal("250")
        assert summary.total_debt == 0

    def test_repay_exceeding_borrow_clamps_debt(self):
        summary = calculate_summary([
            make(TransactionType.LIABILITY, "Borrow", 100),
            make(TransactionType.LIABILITY, "Repay", 250),
        ])
        assert summary.total_debt == Decimal("0")
        assert summary.balance == Decimal("-150")

    def test_collect_exceeding_lend_clamps_receivable(self):
        summary = calculate_summary([
            make(TransactionType.LIABILITY, "Collect", 80),
        ])
        assert summary.total_receivable == Decimal("0")
        assert summary.balance == Decimal("80")

    def test_balance_is_never_clamped(self):
        summary = calculate_summary([make(TransactionType.EXPENSE, "Rent", 900)])
        assert summary.balance == Decimal("-900")

    def test_order_independent(self):
        mixed = SAMPLE + [
            make(TransactionType.EXPENSE, "Transport", "0.1"),
            make(TransactionType.EXPENSE, "Transport", "0.2"),
            make(TransactionType.LIABILITY, "Lend", "33.33"),
        ]
        expected = calculate_summary(mixed)
        for permutation in itertools.permutations(mixed):
            assert calculate_summary(permutation) == expected

    def test_unparseable_amount_counts_as_zero(self):
        rows = [
            {"type": "INCOME", "category": "Salary", "amount": "12.5abc"},
            {"type": "INCOME", "category": "Salary", "amount": "10"},
            {"type": "EXPENSE", "category": "Food", "amount": None},
        ]
        summary = calculate_summary(rows)
        assert summary.total_income == Decimal("10")
        assert summary.total_expense == Decimal("0")
        assert summary.balance == Decimal("10")

    def test_accepts_raw_rows(self):
        rows = [transaction_to_payload(t) for t in SAMPLE]
        assert calculate_summary(rows) == calculate_summary(SAMPLE)

    def test_codec_round_trip_preserves_summary(self):
        decoded = [row_to_transaction(encode(transaction_to_payload(t))) for t in SAMPLE]
        assert calculate_summary(decoded) == calculate_summary(SAMPLE)


class TestDashboardHelpers:
    """Tests for the expense breakdown and cash direction."""

    def test_expenses_by_category(self):
        breakdown = expenses_by_category([
            make(TransactionType.EXPENSE, "Food", 100),
            make(TransactionType.INCOME, "Salary", 5000),
            make(TransactionType.EXPENSE, "Rent", 700),
            make(TransactionType.EXPENSE, "Food", "50.5"),
        ])
        assert breakdown == {"Food": Decimal("150.5"), "Rent": Decimal("700")}
        assert list(breakdown) == ["Food", "Rent"]

    def test_expenses_by_category_empty(self):
        assert expenses_by_category(SAMPLE[:1]) == {}

    def test_cash_direction(self):
        directions = {
            (t.type, t.category): cash_direction(t)
            for t in [
                make(TransactionType.INCOME, "Gift", 1),
                make(TransactionType.EXPENSE, "Food", 1),
                make(TransactionType.LIABILITY, "Borrow", 1),
                make(TransactionType.LIABILITY, "Lend", 1),
                make(TransactionType.LIABILITY, "Repay", 1),
                make(TransactionType.LIABILITY, "Collect", 1),
            ]
        }
        assert directions == {
            (TransactionType.INCOME, "Gift"): 1,
            (TransactionType.EXPENSE, "Food"): -1,
            (TransactionType.LIABILITY, "Borrow"): 1,
            (TransactionType.LIABILITY, "Lend"): -1,
            (TransactionType.LIABILITY, "Repay"): -1,
            (TransactionType.LIABILITY, "Collect"): 1,
        }

    def test_cash_direction_on_raw_row(self):
        assert cash_direction({"type": "LIABILITY", "category": "Collect"}) == 1


class TestExactFold:
    """Tests that large and small amounts sum without rounding."""

    ROWS = [
        {"type": "INCOME", "category": "Salary", "amount": "1E+28"},
        {"type": "INCOME", "category": "Gift", "amount": "1"},
        {"type": "EXPENSE", "category": "Food", "amount": "1E+28"},
    ]

    def test_result_does_not_depend_on_order(self):
        for ordering in itertools.permutations(self.ROWS):
            summary = calculate_summary(ordering)
            assert summary.balance == Decimal("1")
            assert summary.total_income == Decimal("10000000000000000000000000001")
            assert summary.total_expense == Decimal("1E+28")

    def test_small_fractions_are_kept(self):
        rows = [
            {"type": "INCOME", "category": "Salary", "amount": "1E+20"},
            {"type": "INCOME", "category": "Salary", "amount": "0.0001"},
        ]
        assert calculate_summary(rows).total_income == Decimal("100000000000000000000.0001")

    def test_out_of_range_amount_counts_as_zero(self):
        rows = [
            {"type": "INCOME", "category": "Salary", "amount": "1E+70"},
            {"type": "INCOME", "category": "Salary", "amount": "5"},
            {"type": "EXPENSE", "category": "Food", "amount": "Infinity"},
        ]
        summary = calculate_summary(rows)
        assert summary.total_income == Decimal("5")
        assert summary.total_expense == Decimal("0")
        assert expenses_by_category(rows) == {"Food": Decimal("0")}
