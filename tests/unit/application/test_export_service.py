"""Unit tests for ExportService."""
from __future__ import annotations

import asyncio
import io
import zipfile

import pytest
from structlog.testing import capture_logs

from exportkit.application.export import (
    CsvDataColumn,
    ExcelBookStyler,
    ExportService,
    ExportSettings,
    FileStorageExportResult,
    FileType,
    MemoryExportResult,
    UnsupportedFileTypeError,
)
from exportkit.testing.fakes import InMemoryRowSource, numbered_records

COLUMNS = [CsvDataColumn("id", "ID"), CsvDataColumn("name", "Name")]


class TestExportService:
    def test_defaults(self):
        service = ExportService(InMemoryRowSource([]))
        assert service.settings == ExportSettings()
        assert service.calculate_number_of_books(0) == 1

    def test_settings_drive_book_split(self):
        async def _run():
            source = InMemoryRowSource(numbered_records(9))
            service = ExportService(source, ExportSettings(max_rows_per_book=4, max_rows_per_fetch=2))
            assert service.calculate_number_of_books(9) == 3
            result = await service.export_csv("orders", 9, COLUMNS)
            assert isinstance(result, MemoryExportResult)
            assert result.file_type is FileType.ZIP
            with zipfile.ZipFile(await result.get_data()) as zf:
                assert zf.namelist() == ["orders_1.csv", "orders_2.csv", "orders_3.csv"]
            assert all(count <= 2 for _, count in source.calls)
        asyncio.run(_run())

    def test_csv_delimiter_setting(self):
        async def _run():
            service = ExportService(InMemoryRowSource(numbered_records(1)), ExportSettings(csv_delimiter=";"))
            result = await service.export("x", 1, COLUMNS, "csv")
            assert (await result.get_data()).read().decode("utf-8").splitlines()[0] == "ID;Name"
        asyncio.run(_run())

    def test_file_storage_setting(self, tmp_path):
        async def _run():
            settings = ExportSettings(storage="file", work_directory=str(tmp_path))
            service = ExportService(InMemoryRowSource(numbered_records(3)), settings)
            result = await service.export_excel("book", 3, COLUMNS)
            assert isinstance(result, FileStorageExportResult)
            assert result.path.parent == tmp_path
            assert result.create_file_name() == "book.xlsx"
            result.close()
            assert not result.path.exists()
        asyncio.run(_run())

    def test_styler_is_forwarded(self):
        styler = ExcelBookStyler()
        service = ExportService(InMemoryRowSource([]), styler=styler)
        assert service.compiler.builder_factory.create_builder(FileType.XLSX).styler is styler

    def test_logs_completed(self):
        async def _run():
            service = ExportService(InMemoryRowSource(numbered_records(2)))
            with capture_logs() as logs:
                await service.export_csv("x", 2, COLUMNS)
            completed = [entry for entry in logs if entry["event"] == "export.completed"]
            assert len(completed) == 1
            assert completed[0]["export_name"] == "x"
            assert completed[0]["books"] == 1
            assert "duration_ms" in completed[0]
        asyncio.run(_run())

    def test_logs_failed_and_reraises(self):
        async def _run():
            service = ExportService(InMemoryRowSource([]))
            with capture_logs() as logs:
                with pytest.raises(UnsupportedFileTypeError):
                    await service.export("x", 1, COLUMNS, "pdf")
            failed = [entry for entry in logs if entry["event"] == "export.failed"]
            assert failed[0]["error"] == "UnsupportedFileTypeError"
            assert failed[0]["error_code"] == "unsupported_file_type"
            assert failed[0]["error_detail"]["parameter"] == "file_type"
            assert failed[0]["log_level"] == "warning"
        asyncio.run(_run())
