"""Application export – chunked CSV / XLSX exports with sheet and book overflow.

A :class:`BookCompiler` splits a logical row set into books of at most
``max_rows_per_book`` rows, each book built by a :class:`BookBuilder`
fetching from the caller's paged source. A single book is returned as is;
several books are packaged into one zip archive.
"""
from exportkit.application.export.archive import ZipArchive, ZipArchiveResult, ZipEntry
from exportkit.application.export.book import (
    Book,
    BookEvent,
    BookFactory,
    BookState,
    CsvBook,
    CsvBookFactory,
    ExcelBook,
    ExcelBookFactory,
    OpenpyxlWorkbookEngine,
    SheetCursor,
    WorkbookEngine,
)
from exportkit.application.export.builder import (
    ApplyBoldHeadersAction,
    ApplyColumnFormatsAction,
    ApplyColumnWidthAction,
    BookBuilder,
    BookBuilderConfig,
    BookBuilderFactory,
    CsvBookBuilder,
    ExcelBookBuilder,
    ExcelBookStyleAction,
    ExcelBookStyler,
)
from exportkit.application.export.columns import (
    BookDataColumn,
    CsvDataColumn,
    DataType,
    ExcelDataColumn,
    Record,
)
from exportkit.application.export.compiler import BookCompiler
from exportkit.application.export.errors import (
    ArgumentOutOfRangeError,
    BookStateError,
    EmptyCollectionError,
    ExportArgumentError,
    ExportResultStateError,
    MaxColumnCountExceededError,
    MissingArgumentError,
    MissingFieldError,
    UnsupportedFileTypeError,
)
from exportkit.application.export.export_service import ExportService
from exportkit.application.export.file_type import FileType
from exportkit.application.export.limits import (
    EXCEL_MAX_COLUMN_COUNT,
    EXCEL_MAX_ROW_COUNT,
    MAX_DATA_ROWS_PER_SHEET,
)
from exportkit.application.export.results import (
    ExportResult,
    ExportResultFactory,
    FileStorageExportResult,
    FileStorageExportResultFactory,
    MemoryExportResult,
    MemoryExportResultFactory,
)
from exportkit.application.export.row_source import FetchData, OffsetRowSource, RowSource
from exportkit.application.export.settings import ExportSettings

__all__ = [
    "EXCEL_MAX_COLUMN_COUNT",
    "EXCEL_MAX_ROW_COUNT",
    "MAX_DATA_ROWS_PER_SHEET",
    "ApplyBoldHeadersAction",
    "ApplyColumnFormatsAction",
    "ApplyColumnWidthAction",
    "ArgumentOutOfRangeError",
    "Book",
    "BookBuilder",
    "BookBuilderConfig",
    "BookBuilderFactory",
    "BookCompiler",
    "BookDataColumn",
    "BookEvent",
    "BookFactory",
    "BookState",
    "BookStateError",
    "CsvBook",
    "CsvBookBuilder",
    "CsvBookFactory",
    "CsvDataColumn",
    "DataType",
    "EmptyCollectionError",
    "ExcelBook",
    "ExcelBookBuilder",
    "ExcelBookFactory",
    "ExcelBookStyleAction",
    "ExcelBookStyler",
    "ExcelDataColumn",
    "ExportArgumentError",
    "ExportResult",
    "ExportResultFactory",
    "ExportResultStateError",
    "ExportService",
    "ExportSettings",
    "FetchData",
    "FileStorageExportResult",
    "FileStorageExportResultFactory",
    "FileType",
    "MaxColumnCountExceededError",
    "MemoryExportResult",
    "MemoryExportResultFactory",
    "MissingArgumentError",
    "MissingFieldError",
    "OffsetRowSource",
    "OpenpyxlWorkbookEngine",
    "Record",
    "RowSource",
    "SheetCursor",
    "UnsupportedFileTypeError",
    "WorkbookEngine",
    "ZipArchive",
    "ZipArchiveResult",
    "ZipEntry",
]
