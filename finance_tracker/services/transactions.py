"""
Transaction Store Client

Per-user CRUD over the hosted ``transactions`` table.

Every operation is scoped by ``username``: reads filter on it, creates tag
the row with it, and updates/deletes match on id AND username so a user can
never touch another user's rows.

DESIGN DECISION: Store failures do not propagate past this class.
They are logged and degrade to something renderable:
- list   -> empty list
- create -> None
- update -> freshly reloaded list (unchanged if the write failed)
- delete -> freshly reloaded list (unchanged if the write failed)
Callers must not read success into the absence of an exception.
"""

from typing import Optional, Union
from uuid import uuid4

from pydantic import ValidationError

from finance_tracker.log import get_logger
from finance_tracker.models.transaction import (
    PERSON_MAX_LENGTH,
    ExpenseUpdate,
    IncomeUpdate,
    LiabilityUpdate,
    Transaction,
    TransactionDraft,
    TransactionType,
)
from finance_tracker.services.storage import (
    Row,
    RowStoreInterface,
    StorageError,
    decode,
    encode,
)

AnyUpdate = Union[IncomeUpdate, ExpenseUpdate, LiabilityUpdate]

logger = get_logger(__name__)


def transaction_to_payload(transaction: Union[Transaction, TransactionDraft]) -> Row:
    """In-memory payload with persisted column names (``paymentMethod``)."""
    return transaction.model_dump(mode="json", by_alias=True)


def row_to_transaction(row: Row) -> Transaction:
    """
    Decode a stored row; raises ``ValidationError`` on malformed rows.

    A separator inside the note of a non-liability row still splits the
    note, but the tail is not carried as a person. A decoded person longer
    than a person can be is not one; the stored note is kept whole.
    """
    payload = decode(row)
    person = payload.get("person")
    if person is not None and len(person) > PERSON_MAX_LENGTH:
        payload["note"] = row.get("note")
        payload.pop("person")
    elif payload.get("type") != TransactionType.LIABILITY:
        payload.pop("person", None)
    return Transaction.model_validate(payload)


class TransactionStore:
    """
    Remote store client for one table of transaction rows.

    Usage:
        store = TransactionStore(table)
        transactions = await store.list_transactions("alice")
    """

    def __init__(self, table: RowStoreInterface):
        self._table = table

    async def list_transactions(self, username: str) -> list[Transaction]:
        """All of the user's transactions, newest date first."""
        try:
            rows = await self._table.select(
                filters={"username": username},
                order_by="date",
                descending=True,
            )
        except StorageError as e:
            logger.error("transactions_load_failed", username=username, error=str(e))
            return []

        transactions = []
        for row in rows:
            try:
                transactions.append(row_to_transaction(row))
            except ValidationError as e:
                logger.warning(
                    "transaction_row_skipped",
                    transaction_id=row.get("id"),
                    error=str(e),
                )
        return transactions

    async def create_transaction(
        self,
        draft: TransactionDraft,
        username: str,
    ) -> Optional[Transaction]:
        """
        Persist a new transaction under a freshly minted id.

        Not idempotent: every call creates a new record.

        Returns:
            The created record as read back through the codec,
            or None if the store rejected the write or the stored row
            could not be read back
        """
        payload = transaction_to_payload(draft)
        payload["id"] = str(uuid4())
        payload["username"] = username

        try:
            stored = await self._table.insert(encode(payload))
        except StorageError as e:
            logger.error("transaction_create_failed", username=username, error=str(e))
            return None

        try:
            created = row_to_transaction(stored)
        except ValidationError as e:
            logger.error(
                "transaction_create_unreadable",
                transaction_id=payload["id"],
                username=username,
                error=str(e),
            )
            return None

        logger.info(
            "transaction_created",
            transaction_id=created.id,
            username=username,
            type=created.type.value,
        )
        return created

    async def update_transaction(
        self,
        transaction_id: str,
        update: AnyUpdate,
        username: str,
    ) -> list[Transaction]:
        """
        Apply an edit to one of the user's transactions, then reload.

        The edit is merged onto the stored record and the result validated
        as a whole before anything is written. Invalid edits and edits of
        records the user does not own are logged and leave the store as is.
        """
        try:
            current = await self._find(transaction_id, username)
            if current is None:
                logger.warning(
                    "transaction_update_missed",
                    transaction_id=transaction_id,
                    username=username,
                )
            else:
                updated = apply_update(current, update)
                await self._table.update(
                    filters={"id": transaction_id, "username": username},
                    values=encode(transaction_to_payload(updated)),
                )
                logger.info(
                    "transaction_updated",
                    transaction_id=transaction_id,
                    username=username,
                )
        except ValidationError as e:
            logger.warning(
                "transaction_update_rejected",
                transaction_id=transaction_id,
                username=username,
                error=str(e),
            )
        except StorageError as e:
            logger.error(
                "transaction_update_failed",
                transaction_id=transaction_id,
                username=username,
                error=str(e),
            )
        return await self.list_transactions(username)

    async def delete_transaction(
        self,
        transaction_id: str,
        username: str,
    ) -> list[Transaction]:
        """Remove one of the user's transactions, then reload."""
        try:
            removed = await self._table.delete(
                filters={"id": transaction_id, "username": username},
            )
            if removed == 0:
                logger.warning(
                    "transaction_delete_missed",
                    transaction_id=transaction_id,
                    username=username,
                )
            else:
                logger.info(
                    "transaction_deleted",
                    transaction_id=transaction_id,
                    username=username,
                )
        except StorageError as e:
            logger.error(
                "transaction_delete_failed",
                transaction_id=transaction_id,
                username=username,
                error=str(e),
            )
        return await self.list_transactions(username)

    async def _find(self, transaction_id: str, username: str) -> Optional[Transaction]:
        rows = await self._table.select(
            filters={"id": transaction_id, "username": username},
        )
        if not rows:
            return None
        try:
            return row_to_transaction(rows[0])
        except ValidationError as e:
            logger.warning("transaction_row_skipped", transaction_id=transaction_id, error=str(e))
            return None


def apply_update(current: Transaction, update: AnyUpdate) -> Transaction:
    """
    Merge an update struct onto a stored transaction.

    Only fields explicitly set on ``update`` change. Switching type clears
    the fields the new type does not carry (payment method, person).

    Raises:
        ValidationError: If the merged record is not a valid transaction
    """
    values = update.model_dump(by_alias=True, exclude_unset=True)
    values["type"] = update.type

    merged = {**current.model_dump(by_alias=True), **values}
    if update.type != TransactionType.EXPENSE:
        merged["paymentMethod"] = None
    if update.type != TransactionType.LIABILITY:
        merged["person"] = None
    return Transaction.model_validate(merged)
