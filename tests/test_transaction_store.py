"""
Tests for the transaction store client.

Runs against ``InMemoryTable``; ``fail_next`` simulates store outages.
"""

import asyncio
from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.models.transaction import (
    PERSON_MAX_LENGTH,
    ExpenseUpdate,
    IncomeUpdate,
    LiabilityUpdate,
    PaymentMethod,
    TransactionDraft,
    TransactionType,
)
from finance_tracker.services.storage import InMemoryTable, StorageError
from finance_tracker.services.transactions import TransactionStore


class WriteFailingTable(InMemoryTable):
    """Reads succeed, every update write fails."""

    async def update(self, filters, values):
        raise StorageError("write rejected")


@pytest.fixture
def table():
    return InMemoryTable()


@pytest.fixture
def store(table):
    return TransactionStore(table)


def draft(type_=TransactionType.EXPENSE, category="Food", amount="100", day=1, **kwargs):
    return TransactionDraft(
        date=date(2024, 2, day),
        type=type_,
        category=category,
        amount=Decimal(amount),
        **kwargs,
    )


class TestCreateAndList:
    """Tests for creating and listing transactions."""

    def test_create_returns_record_with_id(self, store, table):
        created = asyncio.run(store.create_transaction(
            draft(payment_method=PaymentMethod.CASH, note="Lunch"), "alice"
        ))
        assert created is not None
        assert created.id
        assert created.payment_method == PaymentMethod.CASH

        [row] = table.rows
        assert row["id"] == created.id
        assert row["username"] == "alice"
        assert row["paymentMethod"] == "Cash"
        assert "person" not in row

    def test_create_packs_person_into_note(self, store, table):
        created = asyncio.run(store.create_transaction(
            draft(TransactionType.LIABILITY, "Lend", note="lunch", person="Alice"), "alice"
        ))
        assert table.rows[0]["note"] == "lunch || P:Alice"
        assert created.person == "Alice"
        assert created.note == "lunch"

    def test_create_is_not_idempotent(self, store):
        same = draft()
        first = asyncio.run(store.create_transaction(same, "alice"))
        second = asyncio.run(store.create_transaction(same, "alice"))
        assert first.id != second.id
        assert len(asyncio.run(store.list_transactions("alice"))) == 2

    def test_list_is_newest_first(self, store):
        for day in (3, 10, 1):
            asyncio.run(store.create_transaction(draft(day=day), "alice"))
        transactions = asyncio.run(store.list_transactions("alice"))
        assert [t.date.day for t in transactions] == [10, 3, 1]

    def test_list_is_scoped_to_user(self, store):
        asyncio.run(store.create_transaction(draft(), "alice"))
        asyncio.run(store.create_transaction(draft(), "bob"))
        assert len(asyncio.run(store.list_transactions("alice"))) == 1
        assert asyncio.run(store.list_transactions("carol")) == []

    def test_malformed_rows_are_skipped(self, table, store):
        asyncio.run(store.create_transaction(draft(), "alice"))
        asyncio.run(table.insert({
            "id": "broken",
            "date": "2024-02-02",
            "type": "EXPENSE",
            "category": "Food",
            "amount": "abc",
            "username": "alice",
        }))
        transactions = asyncio.run(store.list_transactions("alice"))
        assert [t.id for t in transactions] != ["broken"]
        assert len(transactions) == 1


class TestFailureDegradation:
    """Tests that store failures degrade instead of raising."""

    def test_list_failure_returns_empty(self, store, table):
        asyncio.run(store.create_transaction(draft(), "alice"))
        table.fail_next()
        assert asyncio.run(store.list_transactions("alice")) == []

    def test_create_failure_returns_none(self, store, table):
        table.fail_next()
        assert asyncio.run(store.create_transaction(draft(), "alice")) is None
        assert table.rows == []

    def test_delete_failure_returns_unchanged_list(self, store, table):
        created = asyncio.run(store.create_transaction(draft(), "alice"))
        table.fail_next()
        transactions = asyncio.run(store.delete_transaction(created.id, "alice"))
        assert [t.id for t in transactions] == [created.id]

    def test_update_failure_returns_unchanged_list(self, store, table):
        created = asyncio.run(store.create_transaction(draft(), "alice"))
        table.fail_next()
        transactions = asyncio.run(store.update_transaction(
            created.id, ExpenseUpdate(amount=Decimal("5")), "alice"
        ))
        assert transactions[0].amount == Decimal("100")


class TestUpdate:
    """Tests for edits through the update structs."""

    def test_update_amount_keeps_identity(self, store):
        created = asyncio.run(store.create_transaction(draft(note="Lunch"), "alice"))
        [updated] = asyncio.run(store.update_transaction(
            created.id, ExpenseUpdate(amount=Decimal("42.5")), "alice"
        ))
        assert updated.id == created.id
        assert updated.amount == Decimal("42.5")
        assert updated.note == "Lunch"

    def test_update_person_only_keeps_note(self, store, table):
        created = asyncio.run(store.create_transaction(
            draft(TransactionType.LIABILITY, "Borrow", note="rent help", person="Alice"), "alice"
        ))
        [updated] = asyncio.run(store.update_transaction(
            created.id, LiabilityUpdate(person="Bob"), "alice"
        ))
        assert updated.person == "Bob"
        assert updated.note == "rent help"
        assert table.rows[0]["note"] == "rent help || P:Bob"

    def test_update_note_only_keeps_person(self, store):
        created = asyncio.run(store.create_transaction(
            draft(TransactionType.LIABILITY, "Lend", person="Alice"), "alice"
        ))
        [updated] = asyncio.run(store.update_transaction(
            created.id, LiabilityUpdate(note="for books"), "alice"
        ))
        assert updated.person == "Alice"
        assert updated.note == "for books"

    def test_type_change_clears_payment_method(self, store, table):
        created = asyncio.run(store.create_transaction(
            draft(payment_method=PaymentMethod.BANK), "alice"
        ))
        [updated] = asyncio.run(store.update_transaction(
            created.id, IncomeUpdate(category="Refund"), "alice"
        ))
        assert updated.type == TransactionType.INCOME
        assert updated.payment_method is None
        assert table.rows[0]["paymentMethod"] is None

    def test_type_change_without_valid_category_is_rejected(self, store):
        created = asyncio.run(store.create_transaction(draft(), "alice"))
        [unchanged] = asyncio.run(store.update_transaction(
            created.id, IncomeUpdate(amount=Decimal("1")), "alice"
        ))
        assert unchanged.type == TransactionType.EXPENSE
        assert unchanged.amount == Decimal("100")

    def test_cannot_update_other_users_row(self, store):
        created = asyncio.run(store.create_transaction(draft(), "alice"))
        assert asyncio.run(store.update_transaction(
            created.id, ExpenseUpdate(amount=Decimal("1")), "bob"
        )) == []
        [mine] = asyncio.run(store.list_transactions("alice"))
        assert mine.amount == Decimal("100")


class TestDelete:
    """Tests for deleting transactions."""

    def test_delete_returns_remaining(self, store):
        keep = asyncio.run(store.create_transaction(draft(day=2), "alice"))
        gone = asyncio.run(store.create_transaction(draft(day=3), "alice"))
        remaining = asyncio.run(store.delete_transaction(gone.id, "alice"))
        assert [t.id for t in remaining] == [keep.id]

    def test_cannot_delete_other_users_row(self, store):
        created = asyncio.run(store.create_transaction(draft(), "alice"))
        asyncio.run(store.delete_transaction(created.id, "bob"))
        assert len(asyncio.run(store.list_transactions("alice"))) == 1

    def test_delete_unknown_id_is_noop(self, store):
        asyncio.run(store.create_transaction(draft(), "alice"))
        assert len(asyncio.run(store.delete_transaction("missing", "alice"))) == 1


class TestSeparatorInNote:
    """Tests for notes that contain the person separator."""

    def test_long_tail_after_separator_stays_in_note(self, store):
        note = "loan || P:" + "x" * (PERSON_MAX_LENGTH + 50)
        created = asyncio.run(store.create_transaction(
            draft(TransactionType.LIABILITY, "Borrow", note=note), "alice"
        ))
        assert created is not None
        assert created.note == note
        assert created.person is None

        [listed] = asyncio.run(store.list_transactions("alice"))
        assert listed.id == created.id
        assert listed.note == note

    def test_short_tail_is_read_as_person(self, store):
        created = asyncio.run(store.create_transaction(
            draft(TransactionType.LIABILITY, "Lend", note="books || P:Rahim"), "alice"
        ))
        assert created.note == "books"
        assert created.person == "Rahim"

    def test_unreadable_created_row_returns_none(self):
        class UnreadableTable(InMemoryTable):
            async def insert(self, row):
                stored = await super().insert(row)
                stored["amount"] = "not a number"
                return stored

        store = TransactionStore(UnreadableTable())
        assert asyncio.run(store.create_transaction(draft(), "alice")) is None


class TestWriteFailure:
    """Tests for a store that reads but rejects update writes."""

    def test_failed_update_write_returns_unchanged_list(self):
        table = WriteFailingTable()
        store = TransactionStore(table)
        created = asyncio.run(store.create_transaction(draft(note="Lunch"), "alice"))

        [unchanged] = asyncio.run(store.update_transaction(
            created.id, ExpenseUpdate(amount=Decimal("5"), note="Dinner"), "alice"
        ))
        assert unchanged.id == created.id
        assert unchanged.amount == Decimal("100")
        assert unchanged.note == "Lunch"
