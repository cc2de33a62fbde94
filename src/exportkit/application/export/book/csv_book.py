"""Application export – CsvBook."""
from __future__ import annotations

import csv
import io
from typing import BinaryIO, Sequence

from exportkit.application.export.book.base import Book
from exportkit.application.export.columns import BookDataColumn, Record, resolve_value

__all__ = ["CsvBook"]


class CsvBook(Book):
    """Streams rows into a delimited-text document (in-memory, UTF-8)."""

    component = "CsvBook"

    def __init__(
        self,
        delimiter: str = ",",
        quoting: int = csv.QUOTE_MINIMAL,
        *,
        bom: bool = False,
        strict_fields: bool = False,
    ) -> None:
        super().__init__(strict_fields=strict_fields)
        self._buffer = io.BytesIO()
        # utf-8-sig emits the BOM for Excel compatibility on first write
        self._text = io.TextIOWrapper(
            self._buffer,
            encoding="utf-8-sig" if bom else "utf-8",
            newline="",
        )
        self._writer = csv.writer(self._text, delimiter=delimiter, quoting=quoting)
        self._rows_written = 0

    @property
    def rows_written(self) -> int:
        return self._rows_written

    def close(self) -> None:
        self._text.close()

    def _write_header(self, headers: list[str]) -> None:
        self._writer.writerow(headers)

    def _append(self, records: Sequence[Record], columns: list[BookDataColumn]) -> None:
        for record in records:
            self._writer.writerow([resolve_value(record, column) for column in columns])
        self._rows_written += len(records)

    def _save(self) -> BinaryIO:
        self._text.flush()
        return io.BytesIO(self._buffer.getvalue())
