"""Application export – file-backed export result."""
from __future__ import annotations

import asyncio
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

from exportkit.application.export.file_type import FileType
from exportkit.application.export.results.base import ExportResult
from exportkit.kernel.errors import StorageError

__all__ = ["FileStorageExportResult"]

logger = logging.getLogger(__name__)


class FileStorageExportResult(ExportResult):
    """Streams the artifact to a file of its own inside ``work_directory``.

    The file is created exclusively (``name_<random><ext>``), so results that
    share a name or a directory never touch each other's data, nor a file the
    caller already had there. :meth:`create_file_name` stays the logical name
    used for downloads and archive entries.

    Blocking file I/O runs on a worker thread. The directory is created on
    first write and left in place; only the artifact file is removed on close.
    """

    component = "FileStorageExportResult"

    def __init__(
        self,
        work_directory: str | Path,
        file_type: FileType,
        name: str,
        count: int = 1,
    ) -> None:
        super().__init__(file_type, name, count)
        self._work_directory = Path(work_directory)
        self._path: Path | None = None

    @property
    def work_directory(self) -> Path:
        return self._work_directory

    @property
    def path(self) -> Path | None:
        """Backing file, or ``None`` until data has been written."""
        return self._path

    async def _read(self) -> BinaryIO:
        try:
            return await asyncio.to_thread(self._path.open, "rb")  # type: ignore[union-attr]
        except OSError as exc:
            raise StorageError(
                f"Could not read export artifact {self._path}",
                path=str(self._path),
                cause=exc,
            ) from exc

    async def _write(self, stream: BinaryIO) -> None:
        writer = asyncio.ensure_future(asyncio.to_thread(self._write_file, stream))
        try:
            await asyncio.shield(writer)
        except asyncio.CancelledError:
            # The worker thread cannot be interrupted; wait so close() sees the file.
            await asyncio.wait([writer])
            raise
        except OSError as exc:
            location = self._path or self._work_directory
            raise StorageError(
                f"Could not write export artifact {location}",
                path=str(location),
                cause=exc,
            ) from exc
        logger.debug("file_storage_export_result.written name=%s path=%s", self.name, self._path)

    def _write_file(self, stream: BinaryIO) -> None:
        self._work_directory.mkdir(parents=True, exist_ok=True)
        fd, raw_path = tempfile.mkstemp(
            dir=self._work_directory,
            prefix=f"{self.name}_",
            suffix=self.file_type.extension,
        )
        self._path = Path(raw_path)
        with os.fdopen(fd, "wb") as target:
            shutil.copyfileobj(stream, target)

    def _release(self) -> None:
        if self._path is None:
            return
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("file_storage_export_result.cleanup_failed path=%s error=%s", self._path, exc)
        else:
            logger.debug("file_storage_export_result.deleted path=%s", self._path)
