"""Application export – books (one in-progress output file each)."""
from exportkit.application.export.book.base import Book
from exportkit.application.export.book.csv_book import CsvBook
from exportkit.application.export.book.engine import (
    OpenpyxlWorkbookEngine,
    WorkbookEngine,
    coerce_cell_value,
)
from exportkit.application.export.book.excel_book import ExcelBook
from exportkit.application.export.book.factory import BookFactory, CsvBookFactory, ExcelBookFactory
from exportkit.application.export.book.state import BookEvent, BookState, SheetCursor, transition

__all__ = [
    "Book",
    "BookEvent",
    "BookFactory",
    "BookState",
    "CsvBook",
    "CsvBookFactory",
    "ExcelBook",
    "ExcelBookFactory",
    "OpenpyxlWorkbookEngine",
    "SheetCursor",
    "WorkbookEngine",
    "coerce_cell_value",
    "transition",
]
