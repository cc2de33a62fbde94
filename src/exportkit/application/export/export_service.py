"""Application export – ExportService wires settings to the compiler."""
from __future__ import annotations

import time
from typing import Any, Iterable

from exportkit.application.export.builder import ExcelBookStyler
from exportkit.application.export.columns import BookDataColumn
from exportkit.application.export.compiler import BookCompiler
from exportkit.application.export.file_type import FileType
from exportkit.application.export.results import ExportResult, ExportResultFactory
from exportkit.application.export.row_source import FetchData
from exportkit.application.export.settings import ExportSettings
from exportkit.kernel.cancellation import CancellationToken
from exportkit.kernel.errors import BaseError
from exportkit.observability.logging import get_logger

__all__ = ["ExportService"]

_log = get_logger(__name__)


class ExportService:
    """Single entry point for exports over one paged data source.

    Storage is chosen by ``settings.storage``; pass ``result_factory`` to
    override it.
    """

    def __init__(
        self,
        fetch_data: FetchData,
        settings: ExportSettings | None = None,
        *,
        styler: ExcelBookStyler | None = None,
        result_factory: ExportResultFactory | None = None,
    ) -> None:
        self._settings = settings or ExportSettings()
        self._compiler = BookCompiler.from_settings(
            fetch_data,
            self._settings,
            styler=styler,
            result_factory=result_factory,
        )

    @property
    def settings(self) -> ExportSettings:
        return self._settings

    @property
    def compiler(self) -> BookCompiler:
        return self._compiler

    def calculate_number_of_books(self, total_row_count: int) -> int:
        return self._compiler.calculate_number_of_books(total_row_count)

    async def export(
        self,
        name: str,
        total_row_count: int,
        columns: Iterable[BookDataColumn] | None,
        file_type: FileType | str,
        cancel_token: CancellationToken | None = None,
    ) -> ExportResult:
        start = time.monotonic()
        log = _log.bind(export_name=name, file_type=str(getattr(file_type, "value", file_type)))
        try:
            result = await self._compiler.compile(name, total_row_count, columns, file_type, cancel_token)
        except BaseException as exc:
            duration_ms = (time.monotonic() - start) * 1000
            failure: dict[str, Any] = {"error": type(exc).__name__}
            if isinstance(exc, BaseError):
                failure.update(error_code=exc.code, error_detail=exc.detail)
            log.warning("export.failed", duration_ms=round(duration_ms, 2), **failure)
            raise
        duration_ms = (time.monotonic() - start) * 1000
        log.info(
            "export.completed",
            duration_ms=round(duration_ms, 2),
            total_rows=total_row_count,
            books=result.count,
            result_type=result.file_type.value,
        )
        return result

    async def export_csv(
        self,
        name: str,
        total_row_count: int,
        columns: Iterable[BookDataColumn] | None,
        cancel_token: CancellationToken | None = None,
    ) -> ExportResult:
        return await self.export(name, total_row_count, columns, FileType.CSV, cancel_token)

    async def export_excel(
        self,
        name: str,
        total_row_count: int,
        columns: Iterable[BookDataColumn] | None,
        cancel_token: CancellationToken | None = None,
    ) -> ExportResult:
        return await self.export(name, total_row_count, columns, FileType.XLSX, cancel_token)
