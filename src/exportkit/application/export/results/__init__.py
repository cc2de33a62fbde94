"""Application export – export results (memory and file storage)."""
from exportkit.application.export.results.base import ExportResult
from exportkit.application.export.results.factory import (
    ExportResultFactory,
    FileStorageExportResultFactory,
    MemoryExportResultFactory,
)
from exportkit.application.export.results.file_storage import FileStorageExportResult
from exportkit.application.export.results.memory import MemoryExportResult

__all__ = [
    "ExportResult",
    "ExportResultFactory",
    "FileStorageExportResult",
    "FileStorageExportResultFactory",
    "MemoryExportResult",
    "MemoryExportResultFactory",
]
