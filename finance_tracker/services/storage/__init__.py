"""
Storage Services Package

Provides the abstract row-store interface, the transaction row codec and
concrete table implementations. Google Sheets is the hosted backend; the
in-memory table backs tests and offline runs.
"""

from finance_tracker.services.storage.interface import (
    ConnectionError,
    Row,
    RowStoreInterface,
    StorageError,
)
from finance_tracker.services.storage.codec import (
    PERSON_SEPARATOR,
    coerce_amount,
    decode,
    encode,
)
from finance_tracker.services.storage.google_sheets import (
    TRANSACTION_COLUMNS,
    USER_COLUMNS,
    GoogleSheetsClient,
    GoogleSheetsTable,
)
from finance_tracker.services.storage.memory import InMemoryTable

__all__ = [
    # Interface
    "Row",
    "RowStoreInterface",
    # Exceptions
    "ConnectionError",
    "StorageError",
    # Codec
    "PERSON_SEPARATOR",
    "coerce_amount",
    "decode",
    "encode",
    # Google Sheets implementation
    "GoogleSheetsClient",
    "GoogleSheetsTable",
    "TRANSACTION_COLUMNS",
    "USER_COLUMNS",
    # In-memory implementation
    "InMemoryTable",
]
