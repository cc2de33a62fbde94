"""Application export – BookBuilder base class."""
from __future__ import annotations

import logging
from typing import BinaryIO, Iterable

from exportkit.application.export.book import Book, BookFactory
from exportkit.application.export.builder.config import BookBuilderConfig
from exportkit.application.export.columns import BookDataColumn, header_names, validate_columns
from exportkit.application.export.errors import ArgumentOutOfRangeError, MissingArgumentError
from exportkit.application.export.file_type import FileType
from exportkit.application.export.limits import EXCEL_MAX_COLUMN_COUNT
from exportkit.application.export.row_source import RowSource
from exportkit.kernel.cancellation import CancellationToken, raise_if_cancelled

__all__ = ["BookBuilder"]

logger = logging.getLogger(__name__)


class BookBuilder:
    """Drives one book to completion for a bounded row budget.

    The builder fetches ``min(max_rows_per_fetch, remaining)`` rows at a time
    and stops at the budget or as soon as the source returns fewer rows than
    requested. It is unaware of sheet boundaries inside the book.
    """

    component = "BookBuilder"
    file_type: FileType
    max_column_count = EXCEL_MAX_COLUMN_COUNT

    def __init__(self, book_factory: BookFactory, config: BookBuilderConfig) -> None:
        if book_factory is None:
            raise MissingArgumentError(component=self.component, operation="__init__", parameter="book_factory")
        if config is None:
            raise MissingArgumentError(component=self.component, operation="__init__", parameter="config")
        self._book_factory = book_factory
        self._config = config

    @property
    def book_factory(self) -> BookFactory:
        return self._book_factory

    @property
    def config(self) -> BookBuilderConfig:
        return self._config

    async def build(
        self,
        row_budget: int,
        columns: Iterable[BookDataColumn] | None,
        row_source: RowSource,
        cancel_token: CancellationToken | None = None,
    ) -> BinaryIO:
        """Build one book of at most *row_budget* rows and return its bytes."""
        column_list = validate_columns(
            columns,
            component=self.component,
            operation="build",
            max_count=self.max_column_count,
        )
        if row_budget < 0:
            raise ArgumentOutOfRangeError(
                f"row_budget cannot be less than zero, got {row_budget}.",
                component=self.component,
                operation="build",
                parameter="row_budget",
            )
        if row_source is None:
            raise MissingArgumentError(component=self.component, operation="build", parameter="row_source")

        raise_if_cancelled(cancel_token)
        with self._book_factory.create_book() as book:
            book.set_columns(header_names(column_list))
            rows = await self._add_book_data(book, row_budget, column_list, row_source, cancel_token)
            self._finish(book, column_list)
            raise_if_cancelled(cancel_token)
            stream = book.save()

        logger.debug("book_builder.book_built file_type=%s rows=%d budget=%d", self.file_type.value, rows, row_budget)
        return stream

    async def _add_book_data(
        self,
        book: Book,
        row_budget: int,
        columns: list[BookDataColumn],
        row_source: RowSource,
        cancel_token: CancellationToken | None,
    ) -> int:
        written = 0
        while written < row_budget:
            raise_if_cancelled(cancel_token)
            requested = min(self._config.max_rows_per_fetch, row_budget - written)
            batch = await row_source.fetch(written, requested, cancel_token)
            if batch is None:
                raise MissingArgumentError(component=self.component, operation="build", parameter="batch")
            if len(batch) > requested:
                batch = list(batch)[:requested]
            logger.debug(
                "book_builder.batch_fetched start=%d requested=%d received=%d",
                written,
                requested,
                len(batch),
            )
            if not batch:
                break
            written += book.add_data(batch, columns, cancel_token)
            if len(batch) < requested:
                break
        return written

    def _finish(self, book: Book, columns: list[BookDataColumn]) -> None:
        """Hook run after the last batch and before the book is saved."""
