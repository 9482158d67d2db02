"""
Main Orchestrator for the Finance Tracker

This module ties the components together and defines the session flow:

    command (add / edit / remove)
      -> store client (codec encode, persist)
      -> re-fetch the user's full list
      -> aggregator recomputes totals on read
      -> UI re-renders

DESIGN DECISION: One remote operation at a time per session. Each command
awaits its store call and then replaces the whole list; there is no local
patching of the list, so what the UI shows is always what the store holds.
"""

from decimal import Decimal
from typing import Optional

from finance_tracker.agents import FinancialAdvisor
from finance_tracker.config import get_settings
from finance_tracker.log import configure_logging, get_logger
from finance_tracker.models.transaction import Summary, Transaction, TransactionDraft
from finance_tracker.models.user import User
from finance_tracker.queries import calculate_summary, expenses_by_category
from finance_tracker.services.auth import AuthService
from finance_tracker.services.storage import (
    TRANSACTION_COLUMNS,
    USER_COLUMNS,
    GoogleSheetsClient,
    GoogleSheetsTable,
    InMemoryTable,
)
from finance_tracker.services.transactions import AnyUpdate, TransactionStore

logger = get_logger(__name__)


class FinanceSession:
    """
    State of one signed-in user.

    Holds the current transaction list; totals are derived from it on
    every read and never cached.
    """

    def __init__(
        self,
        user: User,
        store: TransactionStore,
        advisor: Optional[FinancialAdvisor] = None,
    ):
        self.user = user
        self._store = store
        self._advisor = advisor
        self._transactions: list[Transaction] = []

    @property
    def transactions(self) -> list[Transaction]:
        return list(self._transactions)

    @property
    def summary(self) -> Summary:
        return calculate_summary(self._transactions)

    @property
    def expense_breakdown(self) -> dict[str, Decimal]:
        return expenses_by_category(self._transactions)

    def find(self, transaction_id: str) -> Optional[Transaction]:
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    async def refresh(self) -> list[Transaction]:
        self._transactions = await self._store.list_transactions(self.user.username)
        return self.transactions

    async def add(self, draft: TransactionDraft) -> Optional[Transaction]:
        """Create a transaction and reload. Returns None if the store failed."""
        created = await self._store.create_transaction(draft, self.user.username)
        await self.refresh()
        return created

    async def edit(self, transaction_id: str, update: AnyUpdate) -> list[Transaction]:
        self._transactions = await self._store.update_transaction(
            transaction_id, update, self.user.username
        )
        return self.transactions

    async def remove(self, transaction_id: str) -> list[Transaction]:
        self._transactions = await self._store.delete_transaction(
            transaction_id, self.user.username
        )
        return self.transactions

    async def advice(self) -> str:
        if self._advisor is None:
            self._advisor = FinancialAdvisor()
        return await self._advisor.get_advice(self._transactions)


def create_app_components(
    use_storage: bool = True,
) -> tuple[AuthService, TransactionStore, Optional[GoogleSheetsClient]]:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to use Google Sheets as the row store.
                    Set to False (or leave Sheets unconfigured) to run on
                    in-memory tables.

    Returns:
        (auth_service, transaction_store, sheets_client)
    """
    configure_logging(get_settings().app.log_level)

    sheets_client = None
    if use_storage:
        try:
            sheets_client = GoogleSheetsClient()
            users_table = GoogleSheetsTable(
                sheets_client.users_sheet_name, USER_COLUMNS, sheets_client
            )
            transactions_table = GoogleSheetsTable(
                sheets_client.transactions_sheet_name, TRANSACTION_COLUMNS, sheets_client
            )
        except Exception as e:
            # Storage not configured - continue without it
            logger.warning("storage_not_configured", error=str(e))
            sheets_client = None

    if sheets_client is None:
        users_table = InMemoryTable()
        transactions_table = InMemoryTable()

    return AuthService(users_table), TransactionStore(transactions_table), sheets_client
