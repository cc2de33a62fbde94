"""Application export – in-memory export result."""
from __future__ import annotations

import io
from typing import BinaryIO

from exportkit.application.export.results.base import ExportResult

__all__ = ["MemoryExportResult"]


class MemoryExportResult(ExportResult):
    """Keeps the artifact bytes in memory."""

    component = "MemoryExportResult"

    _buffer: bytes = b""

    @property
    def size(self) -> int:
        return len(self._buffer)

    async def _read(self) -> BinaryIO:
        return io.BytesIO(self._buffer)

    async def _write(self, stream: BinaryIO) -> None:
        self._buffer = stream.read()

    def _release(self) -> None:
        self._buffer = b""
