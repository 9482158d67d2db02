"""
Abstract Row Store Interface

DESIGN DECISION: The application talks to a hosted table store through a
deliberately small interface: select / insert / update / delete over
equality filters. This allows us to:
1. Keep Google Sheets as the hosted backend
2. Use in-memory tables for testing and offline runs
3. Keep the transaction and user services decoupled from the backend

Rows are plain ``dict[str, Any]`` keyed by column name. Empty cells come
back as ``None``. Backends raise ``StorageError`` (or a subclass) on any
transport or store failure; they never swallow errors.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

Row = dict[str, Any]


class RowStoreInterface(ABC):
    """
    One table of rows in a hosted store.

    Any storage implementation (Google Sheets, in-memory, etc.)
    must implement these methods.
    """

    @abstractmethod
    async def select(
        self,
        filters: Optional[Row] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[Row]:
        """
        Return rows whose columns equal every value in ``filters``.

        Args:
            filters: Column -> value equality filters (all must match)
            order_by: Column to sort by, if any
            descending: Sort direction

        Raises:
            StorageError: If the read fails
        """
        pass

    @abstractmethod
    async def insert(self, row: Row) -> Row:
        """
        Append a row and return it as stored.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def update(self, filters: Row, values: Row) -> int:
        """
        Overwrite ``values`` on every row matching ``filters``.

        Returns:
            Number of rows changed (0 when nothing matched)

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def delete(self, filters: Row) -> int:
        """
        Delete every row matching ``filters``.

        Returns:
            Number of rows removed

        Raises:
            StorageError: If the write fails
        """
        pass


def row_matches(row: Row, filters: Optional[Row]) -> bool:
    """Equality match on string form, the only form a sheet cell has."""
    if not filters:
        return True
    return all(
        _cell_text(row.get(column)) == _cell_text(value)
        for column, value in filters.items()
    )


def sort_rows(rows: list[Row], order_by: Optional[str], descending: bool) -> list[Row]:
    if not order_by:
        return rows
    return sorted(rows, key=lambda r: _cell_text(r.get(order_by)), reverse=descending)


def _cell_text(value: Any) -> str:
    return "" if value is None else str(value)


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
