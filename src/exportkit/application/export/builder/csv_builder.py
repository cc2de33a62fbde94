"""Application export – CsvBookBuilder."""
from __future__ import annotations

from exportkit.application.export.builder.base import BookBuilder
from exportkit.application.export.file_type import FileType

__all__ = ["CsvBookBuilder"]


class CsvBookBuilder(BookBuilder):
    """Builds delimited-text books; text has no sheets, rows are concatenated."""

    component = "CsvBookBuilder"
    file_type = FileType.CSV
