"""Application export – ExcelBook.

Rows that would exceed ``max_rows_per_sheet`` transparently start a new
sheet; the cached header is replayed into row 1 of every new sheet. Callers
only ever append logical rows.
"""
from __future__ import annotations

import io
import logging
from typing import Any, BinaryIO, Sequence

from exportkit.application.export.book.base import Book
from exportkit.application.export.book.engine import WorkbookEngine
from exportkit.application.export.book.state import BookEvent, SheetCursor, transition
from exportkit.application.export.columns import BookDataColumn, Record, resolve_value
from exportkit.application.export.errors import (
    ArgumentOutOfRangeError,
    EmptyCollectionError,
    MaxColumnCountExceededError,
    MissingArgumentError,
)
from exportkit.application.export.limits import EXCEL_MAX_COLUMN_COUNT, MAX_DATA_ROWS_PER_SHEET

__all__ = ["ExcelBook"]

logger = logging.getLogger(__name__)


class ExcelBook(Book):
    """Spreadsheet book that overflows across sheets."""

    component = "ExcelBook"
    max_column_count = EXCEL_MAX_COLUMN_COUNT

    def __init__(
        self,
        engine: WorkbookEngine,
        *,
        max_rows_per_sheet: int = MAX_DATA_ROWS_PER_SHEET,
        sheet_name_prefix: str = "Sheet",
        strict_fields: bool = False,
    ) -> None:
        if engine is None:
            raise MissingArgumentError(component=self.component, operation="__init__", parameter="engine")
        if not 0 < max_rows_per_sheet <= MAX_DATA_ROWS_PER_SHEET:
            raise ArgumentOutOfRangeError(
                f"max_rows_per_sheet must be between 1 and {MAX_DATA_ROWS_PER_SHEET}, got {max_rows_per_sheet}.",
                component=self.component,
                operation="__init__",
                parameter="max_rows_per_sheet",
            )
        super().__init__(strict_fields=strict_fields)
        self._engine = engine
        self._max_rows_per_sheet = max_rows_per_sheet
        self._sheet_name_prefix = sheet_name_prefix or "Sheet"
        self._sheets: list[Any] = []
        self._sheet_names: list[str] = []
        self._last_rows: list[int] = []
        self._first_data_rows: list[int] = []
        # None until a data row lands on the current sheet.
        self._cursor: SheetCursor | None = None
        self.add_sheet()

    @property
    def engine(self) -> WorkbookEngine:
        return self._engine

    @property
    def max_rows_per_sheet(self) -> int:
        return self._max_rows_per_sheet

    @property
    def sheet_name_prefix(self) -> str:
        return self._sheet_name_prefix

    @property
    def sheets(self) -> list[Any]:
        return list(self._sheets)

    @property
    def sheet_names(self) -> list[str]:
        return list(self._sheet_names)

    @property
    def sheet_count(self) -> int:
        return len(self._sheets)

    @property
    def starting_row_index(self) -> int:
        """First row below the header (1 when no header was written)."""
        return 2 if self._headers else 1

    def last_row(self, sheet_index: int) -> int:
        """Last written row (header included) of the sheet at *sheet_index*."""
        return self._last_rows[sheet_index]

    def first_data_row(self, sheet_index: int) -> int:
        """First data row of the sheet at *sheet_index*, below the header and any totals row."""
        return self._first_data_rows[sheet_index] or self.starting_row_index

    def add_sheet(self) -> Any:
        """Create the next sheet, named ``"{prefix} {n}"``, and make it current."""
        name = f"{self._sheet_name_prefix} {len(self._sheets) + 1}"
        sheet = self._engine.create_sheet(name)
        self._sheets.append(sheet)
        self._sheet_names.append(name)
        self._last_rows.append(0)
        self._first_data_rows.append(0)
        self._cursor = None
        return sheet

    def set_totals(self, totals: Sequence[Any] | None) -> None:
        """Write a totals row directly below the header of the current sheet.

        Only allowed before the first data append; data then begins one row
        further down.
        """
        next_state = transition(self._state, BookEvent.SET_TOTALS)
        if totals is None:
            raise MissingArgumentError(component=self.component, operation="set_totals", parameter="totals")
        if len(totals) == 0:
            raise EmptyCollectionError(component=self.component, operation="set_totals", parameter="totals")
        if len(totals) > EXCEL_MAX_COLUMN_COUNT:
            raise MaxColumnCountExceededError(
                component=self.component,
                operation="set_totals",
                parameter="totals",
                max_allowed=EXCEL_MAX_COLUMN_COUNT,
                actual=len(totals),
            )
        row = self.starting_row_index
        for column, value in enumerate(totals, start=1):
            self._engine.set_cell(self._current_sheet, row, column, value)
        self._last_rows[-1] = max(self._last_rows[-1], row)
        self._first_data_rows[-1] = row + 1
        self._state = next_state

    def close(self) -> None:
        self._engine.close()

    @property
    def _current_sheet(self) -> Any:
        return self._sheets[-1]

    def _write_header(self, headers: list[str]) -> None:
        self._engine.set_header(self._current_sheet, 1, headers)
        self._last_rows[-1] = max(self._last_rows[-1], 1)

    def _first_data_row(self, column_count: int) -> int:
        first_row = self.starting_row_index
        if self._has_totals_row(first_row, column_count):
            first_row += 1
        self._first_data_rows[-1] = first_row
        return first_row

    def _open_cursor(self, column_count: int) -> SheetCursor:
        return SheetCursor(sheet_number=len(self._sheets), first_row=self._first_data_row(column_count))

    def _has_totals_row(self, row: int, column_count: int) -> bool:
        sheet = self._current_sheet
        for column in range(1, column_count + 1):
            value = self._engine.get_cell(sheet, row, column)
            if value is not None and str(value) != "":
                return True
        return False

    def _roll_over(self, cursor: SheetCursor, column_count: int) -> SheetCursor:
        self._state = transition(self._state, BookEvent.ROLLOVER)
        self.add_sheet()
        if self._headers:
            self._write_header(self._headers)
        next_cursor = cursor.rolled_over(self._first_data_row(column_count))
        logger.debug(
            "excel_book.sheet_rollover from_sheet=%d to_sheet=%d rows=%d",
            cursor.sheet_number,
            next_cursor.sheet_number,
            cursor.rows_written,
        )
        return next_cursor

    def _append(self, records: Sequence[Record], columns: list[BookDataColumn]) -> None:
        column_count = len(columns)
        cursor = self._cursor or self._open_cursor(column_count)
        for record in records:
            if cursor.is_full(self._max_rows_per_sheet):
                cursor = self._roll_over(cursor, column_count)
            row = cursor.next_row
            sheet = self._current_sheet
            for column_index, column in enumerate(columns, start=1):
                self._engine.set_cell(sheet, row, column_index, resolve_value(record, column), column.data_type)
            self._last_rows[-1] = row
            cursor = cursor.advance()
        self._cursor = cursor

    def _save(self) -> BinaryIO:
        stream = io.BytesIO()
        self._engine.save(stream)
        stream.flush()
        stream.seek(0)
        return stream
