"""Application export – ExcelBookBuilder."""
from __future__ import annotations

from exportkit.application.export.book import Book, ExcelBook, ExcelBookFactory
from exportkit.application.export.builder.base import BookBuilder
from exportkit.application.export.builder.config import BookBuilderConfig
from exportkit.application.export.builder.styling import ExcelBookStyler
from exportkit.application.export.columns import BookDataColumn
from exportkit.application.export.file_type import FileType

__all__ = ["ExcelBookBuilder"]


class ExcelBookBuilder(BookBuilder):
    """Builds spreadsheet books; sheet rollover is left entirely to the book."""

    component = "ExcelBookBuilder"
    file_type = FileType.XLSX

    def __init__(
        self,
        book_factory: ExcelBookFactory,
        config: BookBuilderConfig,
        styler: ExcelBookStyler | None = None,
    ) -> None:
        super().__init__(book_factory, config)
        self._styler = styler

    @property
    def styler(self) -> ExcelBookStyler | None:
        return self._styler

    def _finish(self, book: Book, columns: list[BookDataColumn]) -> None:
        if self._styler is not None and isinstance(book, ExcelBook):
            self._styler.apply_styles(book, columns)
