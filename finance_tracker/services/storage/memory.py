"""
In-Memory Storage Implementation

Process-local table used by the test suite and when Google Sheets is not
configured. Rows are copied on the way in and out so callers can never
mutate stored state by accident.
"""

from typing import Optional

from finance_tracker.services.storage.interface import (
    Row,
    RowStoreInterface,
    StorageError,
    row_matches,
    sort_rows,
)


class InMemoryTable(RowStoreInterface):
    """A list of dict rows behind the row-store interface."""

    def __init__(self, rows: Optional[list[Row]] = None):
        self._rows: list[Row] = [dict(row) for row in rows or []]
        self._fail_with: Optional[StorageError] = None

    def fail_next(self, error: Optional[StorageError] = None) -> None:
        """Make the next operation raise, simulating a store outage."""
        self._fail_with = error or StorageError("Simulated store failure")

    def _check_failure(self) -> None:
        if self._fail_with is not None:
            error, self._fail_with = self._fail_with, None
            raise error

    @property
    def rows(self) -> list[Row]:
        return [dict(row) for row in self._rows]

    async def select(
        self,
        filters: Optional[Row] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[Row]:
        self._check_failure()
        rows = [dict(row) for row in self._rows if row_matches(row, filters)]
        return sort_rows(rows, order_by, descending)

    async def insert(self, row: Row) -> Row:
        self._check_failure()
        stored = dict(row)
        self._rows.append(stored)
        return dict(stored)

    async def update(self, filters: Row, values: Row) -> int:
        self._check_failure()
        changed = 0
        for row in self._rows:
            if row_matches(row, filters):
                row.update(values)
                changed += 1
        return changed

    async def delete(self, filters: Row) -> int:
        self._check_failure()
        kept = [row for row in self._rows if not row_matches(row, filters)]
        removed = len(self._rows) - len(kept)
        self._rows = kept
        return removed
