"""Application export – Book base class."""
from __future__ import annotations

import abc
from typing import BinaryIO, Iterable, Sequence

from exportkit.application.export.book.state import BookEvent, BookState, transition
from exportkit.application.export.columns import BookDataColumn, Record, validate_columns
from exportkit.application.export.errors import (
    EmptyCollectionError,
    MaxColumnCountExceededError,
    MissingArgumentError,
    MissingFieldError,
)
from exportkit.kernel.cancellation import CancellationToken, raise_if_cancelled

__all__ = ["Book"]


class Book(abc.ABC):
    """One in-progress output file.

    Lifecycle: header written once, zero or more row batches appended,
    saved to a byte stream exactly once, then closed. A book has a single
    owner and is never appended to concurrently.
    """

    component = "Book"
    max_column_count: int | None = None

    def __init__(self, *, strict_fields: bool = False) -> None:
        self._state = BookState.EMPTY
        self._strict_fields = strict_fields
        self._headers: list[str] = []

    @property
    def state(self) -> BookState:
        return self._state

    @property
    def headers(self) -> list[str]:
        return list(self._headers)

    def set_columns(self, headers: Iterable[str] | None) -> None:
        """Write the header row and cache it."""
        next_state = transition(self._state, BookEvent.SET_COLUMNS)
        if headers is None:
            raise MissingArgumentError(component=self.component, operation="set_columns", parameter="headers")
        header_list = [str(header) for header in headers]
        if not header_list:
            raise EmptyCollectionError(component=self.component, operation="set_columns", parameter="headers")
        if self.max_column_count is not None and len(header_list) > self.max_column_count:
            raise MaxColumnCountExceededError(
                component=self.component,
                operation="set_columns",
                parameter="headers",
                max_allowed=self.max_column_count,
                actual=len(header_list),
            )
        self._headers = header_list
        self._write_header(header_list)
        self._state = next_state

    def add_data(
        self,
        records: Sequence[Record] | None,
        columns: Iterable[BookDataColumn] | None,
        cancel_token: CancellationToken | None = None,
    ) -> int:
        """Append one batch of records; returns the number of rows written."""
        raise_if_cancelled(cancel_token)
        next_state = transition(self._state, BookEvent.APPEND)
        if records is None:
            raise MissingArgumentError(component=self.component, operation="add_data", parameter="records")
        if len(records) == 0:
            raise EmptyCollectionError(component=self.component, operation="add_data", parameter="records")
        column_list = validate_columns(
            columns,
            component=self.component,
            operation="add_data",
            max_count=self.max_column_count,
        )
        if self._strict_fields:
            self._check_fields(records, column_list)
        self._state = next_state
        self._append(records, column_list)
        return len(records)

    def _check_fields(self, records: Sequence[Record], columns: list[BookDataColumn]) -> None:
        # Fail before any row of the batch is written.
        for index, record in enumerate(records):
            for column in columns:
                if column.field_name not in record:
                    raise MissingFieldError(
                        column.field_name,
                        component=self.component,
                        operation="add_data",
                        record_index=index,
                    )

    def save(self) -> BinaryIO:
        """Finalise the book and return its content positioned at offset 0."""
        next_state = transition(self._state, BookEvent.SAVE)
        stream = self._save()
        self._state = next_state
        return stream

    @abc.abstractmethod
    def close(self) -> None: ...

    def __enter__(self) -> "Book":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @abc.abstractmethod
    def _write_header(self, headers: list[str]) -> None: ...

    @abc.abstractmethod
    def _append(self, records: Sequence[Record], columns: list[BookDataColumn]) -> None: ...

    @abc.abstractmethod
    def _save(self) -> BinaryIO: ...
