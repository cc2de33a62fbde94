"""Application export – export result factories."""
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

from exportkit.application.export.file_type import FileType
from exportkit.application.export.results.base import ExportResult
from exportkit.application.export.results.file_storage import FileStorageExportResult
from exportkit.application.export.results.memory import MemoryExportResult

__all__ = [
    "ExportResultFactory",
    "FileStorageExportResultFactory",
    "MemoryExportResultFactory",
]


@runtime_checkable
class ExportResultFactory(Protocol):
    """Port: stores a finished stream and hands back its result."""

    async def create(
        self,
        data: BinaryIO,
        file_type: FileType,
        name: str,
        count: int = 1,
    ) -> ExportResult: ...


async def _populate(result: ExportResult, data: BinaryIO) -> ExportResult:
    try:
        await result.set_data(data)
    except BaseException:
        result.close()
        raise
    return result


class MemoryExportResultFactory:
    async def create(
        self,
        data: BinaryIO,
        file_type: FileType,
        name: str,
        count: int = 1,
    ) -> MemoryExportResult:
        return await _populate(MemoryExportResult(file_type, name, count), data)


class FileStorageExportResultFactory:
    """Creates file-backed results under *work_directory* (system temp by default)."""

    def __init__(self, work_directory: str | Path | None = None) -> None:
        self._work_directory = Path(work_directory) if work_directory else Path(tempfile.gettempdir())

    @property
    def work_directory(self) -> Path:
        return self._work_directory

    async def create(
        self,
        data: BinaryIO,
        file_type: FileType,
        name: str,
        count: int = 1,
    ) -> FileStorageExportResult:
        result = FileStorageExportResult(self._work_directory, file_type, name, count)
        return await _populate(result, data)
