"""Services package."""

from finance_tracker.services.auth import AuthService, hash_password, verify_password
from finance_tracker.services.storage import (
    ConnectionError,
    GoogleSheetsClient,
    GoogleSheetsTable,
    InMemoryTable,
    RowStoreInterface,
    StorageError,
)
from finance_tracker.services.transactions import (
    TransactionStore,
    apply_update,
    row_to_transaction,
    transaction_to_payload,
)

__all__ = [
    # Auth
    "AuthService",
    "hash_password",
    "verify_password",
    # Storage services
    "ConnectionError",
    "GoogleSheetsClient",
    "GoogleSheetsTable",
    "InMemoryTable",
    "RowStoreInterface",
    "StorageError",
    # Transactions
    "TransactionStore",
    "apply_update",
    "row_to_transaction",
    "transaction_to_payload",
]
