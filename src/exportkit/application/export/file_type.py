"""Application export – FileType."""
from __future__ import annotations

from enum import Enum

__all__ = ["FileType"]

_MEDIA_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "zip": "application/zip",
}


class FileType(str, Enum):
    """Output container formats. ``ZIP`` is the multi-book archive format."""

    CSV = "csv"
    XLSX = "xlsx"
    ZIP = "zip"

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self.value]

    @property
    def is_archive(self) -> bool:
        return self is FileType.ZIP
