"""Application export – BookCompiler.

Splits a logical row set into as many books as the per-book row limit
requires, builds each one and returns either the single book or a zip
archive of all of them.
"""
from __future__ import annotations

import asyncio
import logging
import tempfile
from typing import BinaryIO, Iterable

from exportkit.application.export.archive import ZipArchive
from exportkit.application.export.builder import BookBuilderFactory, ExcelBookStyler
from exportkit.application.export.columns import BookDataColumn, validate_columns
from exportkit.application.export.errors import (
    ArgumentOutOfRangeError,
    MissingArgumentError,
    UnsupportedFileTypeError,
)
from exportkit.application.export.file_type import FileType
from exportkit.application.export.limits import (
    EXCEL_MAX_COLUMN_COUNT,
    MAX_DATA_ROWS_PER_SHEET,
    calculate_number_of_chunks,
)
from exportkit.application.export.results import (
    ExportResult,
    ExportResultFactory,
    FileStorageExportResultFactory,
    MemoryExportResultFactory,
)
from exportkit.application.export.row_source import FetchData
from exportkit.application.export.settings import STORAGE_FILE, ExportSettings
from exportkit.kernel.cancellation import CancellationToken, raise_if_cancelled

__all__ = ["BookCompiler"]

logger = logging.getLogger(__name__)

# Archives larger than this spill from memory to a temporary file.
_SPOOL_MAX_SIZE = 16 * 1024 * 1024


class BookCompiler:
    """Root of the export pipeline.

    Book *i* covers rows ``[i * max_rows_per_book, (i + 1) * max_rows_per_book)``
    of the caller's data. With ``max_parallel_books > 1`` books are built
    concurrently; archive entries keep their sequence order either way.
    """

    component = "BookCompiler"

    def __init__(
        self,
        builder_factory: BookBuilderFactory,
        max_rows_per_book: int = MAX_DATA_ROWS_PER_SHEET,
        result_factory: ExportResultFactory | None = None,
        *,
        max_parallel_books: int = 1,
    ) -> None:
        if builder_factory is None:
            raise MissingArgumentError(component=self.component, operation="__init__", parameter="builder_factory")
        if max_rows_per_book <= 0:
            raise ArgumentOutOfRangeError(
                f"max_rows_per_book must be > 0, got {max_rows_per_book}.",
                component=self.component,
                operation="__init__",
                parameter="max_rows_per_book",
            )
        if max_parallel_books <= 0:
            raise ArgumentOutOfRangeError(
                f"max_parallel_books must be > 0, got {max_parallel_books}.",
                component=self.component,
                operation="__init__",
                parameter="max_parallel_books",
            )
        self._builder_factory = builder_factory
        self._max_rows_per_book = max_rows_per_book
        self._result_factory: ExportResultFactory = result_factory or MemoryExportResultFactory()
        self._max_parallel_books = max_parallel_books

    @classmethod
    def from_settings(
        cls,
        fetch_data: FetchData,
        settings: ExportSettings,
        *,
        styler: ExcelBookStyler | None = None,
        result_factory: ExportResultFactory | None = None,
    ) -> "BookCompiler":
        if result_factory is None:
            if settings.storage == STORAGE_FILE:
                result_factory = FileStorageExportResultFactory(settings.work_directory or None)
            else:
                result_factory = MemoryExportResultFactory()
        return cls(
            BookBuilderFactory.from_settings(fetch_data, settings, styler=styler),
            settings.max_rows_per_book,
            result_factory,
            max_parallel_books=settings.max_parallel_books,
        )

    @property
    def builder_factory(self) -> BookBuilderFactory:
        return self._builder_factory

    @property
    def max_rows_per_book(self) -> int:
        return self._max_rows_per_book

    @property
    def max_parallel_books(self) -> int:
        return self._max_parallel_books

    @property
    def result_factory(self) -> ExportResultFactory:
        return self._result_factory

    def calculate_number_of_books(self, total_row_count: int) -> int:
        """``max(1, ceil(total_row_count / max_rows_per_book))``."""
        if total_row_count is None:
            raise MissingArgumentError(
                component=self.component, operation="calculate_number_of_books", parameter="total_row_count"
            )
        if total_row_count < 0:
            raise ArgumentOutOfRangeError(
                f"total_row_count cannot be less than zero, got {total_row_count}.",
                component=self.component,
                operation="calculate_number_of_books",
                parameter="total_row_count",
            )
        return calculate_number_of_chunks(total_row_count, self._max_rows_per_book)

    async def compile_csv(
        self,
        name: str,
        total_row_count: int,
        columns: Iterable[BookDataColumn] | None,
        cancel_token: CancellationToken | None = None,
    ) -> ExportResult:
        return await self.compile(name, total_row_count, columns, FileType.CSV, cancel_token)

    async def compile_excel(
        self,
        name: str,
        total_row_count: int,
        columns: Iterable[BookDataColumn] | None,
        cancel_token: CancellationToken | None = None,
    ) -> ExportResult:
        return await self.compile(name, total_row_count, columns, FileType.XLSX, cancel_token)

    async def compile(
        self,
        name: str,
        total_row_count: int,
        columns: Iterable[BookDataColumn] | None,
        file_type: FileType | str,
        cancel_token: CancellationToken | None = None,
    ) -> ExportResult:
        """Build the export and return its result; the caller owns (and closes) it.

        On any failure, cancellation included, every artifact created so far
        is released before the error propagates.
        """
        self._validate_name(name)
        book_count = self.calculate_number_of_books(total_row_count)
        column_list = validate_columns(
            columns,
            component=self.component,
            operation="compile",
            max_count=EXCEL_MAX_COLUMN_COUNT,
        )
        book_type = self._resolve_file_type(file_type)
        raise_if_cancelled(cancel_token)

        logger.debug(
            "book_compiler.started name=%s file_type=%s total_rows=%d books=%d",
            name,
            book_type.value,
            total_row_count,
            book_count,
        )
        if book_count == 1:
            stream = await self._build_book(book_type, 0, total_row_count, column_list, cancel_token)
            try:
                result = await self._result_factory.create(stream, book_type, name, 1)
            finally:
                stream.close()
        else:
            books = await self._build_books(name, total_row_count, book_count, column_list, book_type, cancel_token)
            try:
                result = await self._package(name, books, cancel_token)
            finally:
                for book in books:
                    book.close()

        logger.info(
            "book_compiler.completed name=%s file_type=%s books=%d",
            name,
            result.file_type.value,
            result.count,
        )
        return result

    def _validate_name(self, name: str) -> None:
        if name is None:
            raise MissingArgumentError(component=self.component, operation="compile", parameter="name")
        if not name.strip():
            raise ArgumentOutOfRangeError(
                "name cannot be blank.",
                component=self.component,
                operation="compile",
                parameter="name",
            )

    def _resolve_file_type(self, file_type: FileType | str) -> FileType:
        if file_type is None:
            raise MissingArgumentError(component=self.component, operation="compile", parameter="file_type")
        if not self._builder_factory.supports(file_type) or FileType(file_type).is_archive:
            raise UnsupportedFileTypeError(file_type, component=self.component, operation="compile")
        return FileType(file_type)

    async def _build_book(
        self,
        file_type: FileType,
        offset: int,
        row_budget: int,
        columns: list[BookDataColumn],
        cancel_token: CancellationToken | None,
    ) -> BinaryIO:
        builder = self._builder_factory.create_builder(file_type)
        row_source = self._builder_factory.create_row_source(offset)
        stream = await builder.build(row_budget, columns, row_source, cancel_token)
        logger.debug("book_compiler.book_built offset=%d budget=%d", offset, row_budget)
        return stream

    async def _build_books(
        self,
        name: str,
        total_row_count: int,
        book_count: int,
        columns: list[BookDataColumn],
        file_type: FileType,
        cancel_token: CancellationToken | None,
    ) -> list[ExportResult]:
        books: list[ExportResult | None] = [None] * book_count
        semaphore = asyncio.Semaphore(self._max_parallel_books)

        async def _run(index: int) -> None:
            async with semaphore:
                raise_if_cancelled(cancel_token)
                offset = index * self._max_rows_per_book
                budget = min(self._max_rows_per_book, total_row_count - offset)
                stream = await self._build_book(file_type, offset, budget, columns, cancel_token)
                try:
                    books[index] = await self._result_factory.create(stream, file_type, f"{name}_{index + 1}", 1)
                finally:
                    stream.close()

        try:
            if self._max_parallel_books == 1:
                for index in range(book_count):
                    await _run(index)
            else:
                loop = asyncio.get_running_loop()
                tasks = [loop.create_task(_run(index)) for index in range(book_count)]
                try:
                    await asyncio.gather(*tasks)
                except BaseException:
                    for task in tasks:
                        task.cancel()
                    await asyncio.gather(*tasks, return_exceptions=True)
                    raise
        except BaseException:
            for book in books:
                if book is not None:
                    book.close()
            logger.debug("book_compiler.books_released name=%s", name)
            raise
        return [book for book in books if book is not None]

    async def _package(
        self,
        name: str,
        books: list[ExportResult],
        cancel_token: CancellationToken | None,
    ) -> ExportResult:
        archive = ZipArchive()
        for book in books:
            archive.add_entry(book.create_file_name(), book.get_data)
        raise_if_cancelled(cancel_token)

        with tempfile.SpooledTemporaryFile(max_size=_SPOOL_MAX_SIZE) as spool:
            packaged = await archive.create_zip(name, spool)
            return await self._result_factory.create(packaged.data, FileType.ZIP, name, len(books))
