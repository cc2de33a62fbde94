"""Application export – book factories."""
from __future__ import annotations

import csv
from typing import Callable, Protocol, runtime_checkable

from exportkit.application.export.book.base import Book
from exportkit.application.export.book.csv_book import CsvBook
from exportkit.application.export.book.engine import OpenpyxlWorkbookEngine, WorkbookEngine
from exportkit.application.export.book.excel_book import ExcelBook
from exportkit.application.export.limits import MAX_DATA_ROWS_PER_SHEET

__all__ = ["BookFactory", "CsvBookFactory", "ExcelBookFactory"]


@runtime_checkable
class BookFactory(Protocol):
    """Port: creates a fresh, empty book per call."""

    def create_book(self) -> Book: ...


class CsvBookFactory:
    def __init__(
        self,
        delimiter: str = ",",
        quoting: int = csv.QUOTE_MINIMAL,
        *,
        bom: bool = False,
        strict_fields: bool = False,
    ) -> None:
        self._delimiter = delimiter
        self._quoting = quoting
        self._bom = bom
        self._strict_fields = strict_fields

    def create_book(self) -> CsvBook:
        return CsvBook(
            self._delimiter,
            self._quoting,
            bom=self._bom,
            strict_fields=self._strict_fields,
        )


class ExcelBookFactory:
    """Creates :class:`ExcelBook` instances, each on its own engine."""

    def __init__(
        self,
        max_rows_per_sheet: int = MAX_DATA_ROWS_PER_SHEET,
        *,
        sheet_name_prefix: str = "Sheet",
        strict_fields: bool = False,
        engine_factory: Callable[[], WorkbookEngine] = OpenpyxlWorkbookEngine,
    ) -> None:
        self._max_rows_per_sheet = max_rows_per_sheet
        self._sheet_name_prefix = sheet_name_prefix
        self._strict_fields = strict_fields
        self._engine_factory = engine_factory

    def create_book(self) -> ExcelBook:
        return ExcelBook(
            self._engine_factory(),
            max_rows_per_sheet=self._max_rows_per_sheet,
            sheet_name_prefix=self._sheet_name_prefix,
            strict_fields=self._strict_fields,
        )
