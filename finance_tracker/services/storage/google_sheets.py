"""
Google Sheets Storage Implementation

DESIGN DECISION: Google Sheets is the hosted row store because:
1. Users can view their ledger directly in Sheets
2. No database setup required
3. Built-in backup (Google's infrastructure)
4. Easy to export/migrate later

TRADEOFFS:
- Not suitable for high-volume data (we're fine for personal use)
- No transactions (one remote operation at a time per session)
- Only connecting is retried; an append is not idempotent, so a retried
  write could duplicate a row
- Limited query capabilities (we filter and sort in Python)
- Every cell is text; empty cells are read back as None

Each worksheet is one table: row 1 holds the column names, every other row
holds one record.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

import gspread
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from finance_tracker.config import get_settings
from finance_tracker.log import get_logger
from finance_tracker.services.storage.interface import (
    ConnectionError,
    Row,
    RowStoreInterface,
    StorageError,
    row_matches,
    sort_rows,
)


# Column mappings for the transactions sheet
TRANSACTION_COLUMNS = [
    "id",
    "date",
    "type",
    "category",
    "amount",
    "paymentMethod",
    "note",
    "username",
]

# Column mappings for the users sheet
USER_COLUMNS = [
    "username",
    "password_hash",
    "avatar_url",
]

logger = get_logger(__name__)


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = get_settings().google_sheets

    @property
    def transactions_sheet_name(self) -> str:
        return self._settings.transactions_sheet_name

    @property
    def users_sheet_name(self) -> str:
        return self._settings.users_sheet_name

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise ConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def get_worksheet(self, name: str, columns: list[str]) -> gspread.Worksheet:
        """Get or create a worksheet whose first row holds ``columns``."""
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(name)
        except gspread.WorksheetNotFound:
            sheet = spreadsheet.add_worksheet(
                title=name,
                rows=1000,
                cols=len(columns),
            )
            sheet.append_row(columns)
            logger.info("worksheet_created", worksheet=name)
        return sheet


class GoogleSheetsTable(RowStoreInterface):
    """
    Google Sheets implementation of one row-store table.

    Reads pull the whole worksheet and filter in Python; writes address
    rows by their 1-based sheet index (row 1 is the header).
    """

    def __init__(
        self,
        sheet_name: str,
        columns: list[str],
        client: Optional[GoogleSheetsClient] = None,
    ):
        self._client = client or GoogleSheetsClient()
        self._sheet_name = sheet_name
        self._columns = columns

    def _sheet(self) -> gspread.Worksheet:
        return self._client.get_worksheet(self._sheet_name, self._columns)

    def _to_cells(self, row: Row) -> list[str]:
        return [_to_cell(row.get(column)) for column in self._columns]

    def _from_cells(self, header: list[str], cells: list[str]) -> Row:
        # Handle short rows (trailing empty cells are not returned)
        row = {}
        for index, column in enumerate(header):
            value = cells[index] if index < len(cells) else ""
            row[column] = value if value != "" else None
        return row

    def _indexed_rows(self, sheet: gspread.Worksheet) -> list[tuple[int, Row]]:
        """All data rows with their sheet row numbers."""
        values = sheet.get_all_values()
        if not values:
            return []
        header = values[0] or self._columns
        indexed = []
        for idx, cells in enumerate(values[1:], start=2):
            if not any(cells):  # Skip empty rows
                continue
            indexed.append((idx, self._from_cells(header, cells)))
        return indexed

    async def select(
        self,
        filters: Optional[Row] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[Row]:
        try:
            sheet = self._sheet()
            rows = [
                row for _, row in self._indexed_rows(sheet)
                if row_matches(row, filters)
            ]
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to read {self._sheet_name}: {e}")
        return sort_rows(rows, order_by, descending)

    async def insert(self, row: Row) -> Row:
        try:
            sheet = self._sheet()
            cells = self._to_cells(row)
            sheet.append_row(cells, value_input_option="RAW")
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to insert into {self._sheet_name}: {e}")
        return self._from_cells(self._columns, cells)

    async def update(self, filters: Row, values: Row) -> int:
        try:
            sheet = self._sheet()
            changed = 0
            for idx, existing in self._indexed_rows(sheet):
                if not row_matches(existing, filters):
                    continue
                merged = {**existing, **values}
                sheet.update(
                    range_name=f"A{idx}",
                    values=[self._to_cells(merged)],
                    value_input_option="RAW",
                )
                changed += 1
            return changed
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to update {self._sheet_name}: {e}")

    async def delete(self, filters: Row) -> int:
        try:
            sheet = self._sheet()
            matches = [
                idx for idx, row in self._indexed_rows(sheet)
                if row_matches(row, filters)
            ]
            # Bottom-up so earlier deletions don't shift later indexes
            for idx in reversed(matches):
                sheet.delete_rows(idx)
            return len(matches)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to delete from {self._sheet_name}: {e}")


def _to_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)
