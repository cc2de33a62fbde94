"""Application export – zip packaging of multi-book exports."""
from __future__ import annotations

import asyncio
import io
import logging
import shutil
import zipfile
from dataclasses import dataclass
from typing import Awaitable, BinaryIO, Callable

from exportkit.application.export.errors import (
    ArgumentOutOfRangeError,
    EmptyCollectionError,
    MissingArgumentError,
)

__all__ = ["ZipArchive", "ZipArchiveResult", "ZipEntry"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZipEntry:
    """Archive member; ``get_data`` opens a fresh stream over its content."""

    name: str
    get_data: Callable[[], Awaitable[BinaryIO]]


@dataclass(frozen=True)
class ZipArchiveResult:
    data: BinaryIO
    name: str


class ZipArchive:
    """Collects entries and writes them, in insertion order, to one zip stream."""

    component = "ZipArchive"

    def __init__(self) -> None:
        self._entries: list[ZipEntry] = []

    @property
    def entries(self) -> list[ZipEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add_entry(self, name: str, get_data: Callable[[], Awaitable[BinaryIO]]) -> ZipEntry:
        if name is None:
            raise MissingArgumentError(component=self.component, operation="add_entry", parameter="name")
        if get_data is None:
            raise MissingArgumentError(component=self.component, operation="add_entry", parameter="get_data")
        if any(entry.name == name for entry in self._entries):
            raise ArgumentOutOfRangeError(
                f"An entry named {name!r} already exists.",
                component=self.component,
                operation="add_entry",
                parameter="name",
            )
        entry = ZipEntry(name, get_data)
        self._entries.append(entry)
        return entry

    async def create_zip(self, file_name: str, stream: BinaryIO | None = None) -> ZipArchiveResult:
        """Write every entry into *stream* (a new ``BytesIO`` by default).

        The returned stream is positioned at 0; ``.zip`` is appended to
        *file_name* when missing.
        """
        if file_name is None:
            raise MissingArgumentError(component=self.component, operation="create_zip", parameter="file_name")
        if not file_name.strip():
            raise ArgumentOutOfRangeError(
                "file_name cannot be blank.",
                component=self.component,
                operation="create_zip",
                parameter="file_name",
            )
        if not self._entries:
            raise EmptyCollectionError(component=self.component, operation="create_zip", parameter="entries")

        target = stream if stream is not None else io.BytesIO()
        with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for entry in self._entries:
                data = await entry.get_data()
                try:
                    await asyncio.to_thread(self._write_entry, archive, entry.name, data)
                finally:
                    data.close()
        target.seek(0)

        name = file_name if file_name.lower().endswith(".zip") else f"{file_name}.zip"
        logger.debug("zip_archive.created name=%s entries=%d", name, len(self._entries))
        return ZipArchiveResult(target, name)

    @staticmethod
    def _write_entry(archive: zipfile.ZipFile, name: str, data: BinaryIO) -> None:
        with archive.open(name, "w", force_zip64=True) as member:
            shutil.copyfileobj(data, member)
