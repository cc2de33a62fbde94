"""Application export – BookBuilderFactory."""
from __future__ import annotations

import logging
from typing import Callable, Mapping

from exportkit.application.export.book import CsvBookFactory, ExcelBookFactory
from exportkit.application.export.builder.base import BookBuilder
from exportkit.application.export.builder.config import BookBuilderConfig
from exportkit.application.export.builder.csv_builder import CsvBookBuilder
from exportkit.application.export.builder.excel_builder import ExcelBookBuilder
from exportkit.application.export.builder.styling import ExcelBookStyler
from exportkit.application.export.errors import MissingArgumentError, UnsupportedFileTypeError
from exportkit.application.export.file_type import FileType
from exportkit.application.export.limits import MAX_DATA_ROWS_PER_SHEET
from exportkit.application.export.row_source import FetchData, OffsetRowSource
from exportkit.application.export.settings import ExportSettings

__all__ = ["BookBuilderFactory", "BuilderConstructor"]

logger = logging.getLogger(__name__)

BuilderConstructor = Callable[[], BookBuilder]


class BookBuilderFactory:
    """Registry of book builders keyed by :class:`FileType`.

    Also creates the per-book row source: a view over the caller's fetch
    shifted by the book's starting offset.
    """

    component = "BookBuilderFactory"

    def __init__(
        self,
        config: BookBuilderConfig,
        builders: Mapping[FileType, BuilderConstructor] | None = None,
        *,
        max_rows_per_sheet: int = MAX_DATA_ROWS_PER_SHEET,
        sheet_name_prefix: str = "Sheet",
        csv_delimiter: str = ",",
        csv_bom: bool = False,
        strict_fields: bool = False,
        styler: ExcelBookStyler | None = None,
    ) -> None:
        if config is None:
            raise MissingArgumentError(component=self.component, operation="__init__", parameter="config")
        self._config = config
        if builders is None:
            csv_books = CsvBookFactory(csv_delimiter, bom=csv_bom, strict_fields=strict_fields)
            excel_books = ExcelBookFactory(
                max_rows_per_sheet,
                sheet_name_prefix=sheet_name_prefix,
                strict_fields=strict_fields,
            )
            builders = {
                FileType.CSV: lambda: CsvBookBuilder(csv_books, config),
                FileType.XLSX: lambda: ExcelBookBuilder(excel_books, config, styler),
            }
        self._builders: dict[FileType, BuilderConstructor] = dict(builders)

    @classmethod
    def from_settings(
        cls,
        fetch_data: FetchData,
        settings: ExportSettings,
        *,
        styler: ExcelBookStyler | None = None,
    ) -> "BookBuilderFactory":
        config = BookBuilderConfig(fetch_data, settings.max_rows_per_fetch)
        return cls(
            config,
            max_rows_per_sheet=settings.max_rows_per_sheet,
            sheet_name_prefix=settings.sheet_name_prefix,
            csv_delimiter=settings.csv_delimiter,
            csv_bom=settings.csv_bom,
            strict_fields=settings.strict_fields,
            styler=styler,
        )

    @property
    def config(self) -> BookBuilderConfig:
        return self._config

    @property
    def file_types(self) -> frozenset[FileType]:
        return frozenset(self._builders)

    def register(self, file_type: FileType, constructor: BuilderConstructor) -> None:
        self._builders[FileType(file_type)] = constructor
        logger.debug("book_builder_factory.registered file_type=%s", file_type)

    def supports(self, file_type: FileType | str) -> bool:
        try:
            return FileType(file_type) in self._builders
        except ValueError:
            return False

    def create_builder(self, file_type: FileType | str) -> BookBuilder:
        """Return a fresh builder for *file_type*."""
        try:
            constructor = self._builders[FileType(file_type)]
        except (KeyError, ValueError):
            raise UnsupportedFileTypeError(
                file_type, component=self.component, operation="create_builder"
            ) from None
        return constructor()

    def create_row_source(self, offset: int = 0) -> OffsetRowSource:
        return OffsetRowSource(self._config.fetch_data, offset)
