"""Application export – ExportResult base class."""
from __future__ import annotations

import abc
from typing import BinaryIO

from exportkit.application.export.errors import (
    ArgumentOutOfRangeError,
    ExportResultStateError,
    MissingArgumentError,
)
from exportkit.application.export.file_type import FileType

__all__ = ["ExportResult"]


class ExportResult(abc.ABC):
    """Owned handle to the finished artifact of an export.

    Data is written exactly once and may be read any number of times until
    :meth:`close`, which releases the backing storage.
    """

    component = "ExportResult"

    def __init__(self, file_type: FileType, name: str, count: int = 1) -> None:
        if name is None:
            raise MissingArgumentError(component=self.component, operation="__init__", parameter="name")
        if not name.strip():
            raise ArgumentOutOfRangeError(
                "name cannot be blank.",
                component=self.component,
                operation="__init__",
                parameter="name",
            )
        if count < 1:
            raise ArgumentOutOfRangeError(
                f"count must be >= 1, got {count}.",
                component=self.component,
                operation="__init__",
                parameter="count",
            )
        self._file_type = FileType(file_type)
        self._name = name
        self._count = count
        self._written = False
        self._closed = False

    @property
    def count(self) -> int:
        """Number of books the artifact holds."""
        return self._count

    @property
    def file_type(self) -> FileType:
        return self._file_type

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_written(self) -> bool:
        return self._written

    @property
    def is_closed(self) -> bool:
        return self._closed

    def create_file_name(self) -> str:
        return f"{self._name}{self._file_type.extension}"

    async def get_data(self) -> BinaryIO:
        """Return a new readable stream over the artifact, positioned at 0."""
        if self._closed:
            raise ExportResultStateError(f"Export result {self._name!r} is closed")
        if not self._written:
            raise ExportResultStateError(f"Export result {self._name!r} has no data yet")
        return await self._read()

    async def set_data(self, stream: BinaryIO) -> None:
        """Store *stream* (read from its current position to the end)."""
        if stream is None:
            raise MissingArgumentError(component=self.component, operation="set_data", parameter="stream")
        if self._closed:
            raise ExportResultStateError(f"Export result {self._name!r} is closed")
        if self._written:
            raise ExportResultStateError(f"Export result {self._name!r} was already written")
        await self._write(stream)
        self._written = True

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._release()

    def __enter__(self) -> "ExportResult":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._name!r}, file_type={self._file_type.value!r}, "
            f"count={self._count})"
        )

    @abc.abstractmethod
    async def _read(self) -> BinaryIO: ...

    @abc.abstractmethod
    async def _write(self, stream: BinaryIO) -> None: ...

    @abc.abstractmethod
    def _release(self) -> None: ...
