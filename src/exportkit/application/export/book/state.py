"""Application export – book lifecycle state machine and sheet cursor.

Both pieces are pure: ``transition`` is a table lookup and ``SheetCursor``
is an immutable value, so rollover boundaries can be tested without any
document engine.
"""
from __future__ import annotations

import dataclasses
from enum import Enum

from exportkit.application.export.errors import BookStateError

__all__ = ["BookEvent", "BookState", "SheetCursor", "transition"]


class BookState(str, Enum):
    EMPTY = "empty"
    HEADER_WRITTEN = "header_written"
    APPENDING = "appending"
    FINALIZED = "finalized"


class BookEvent(str, Enum):
    SET_COLUMNS = "set_columns"
    SET_TOTALS = "set_totals"
    APPEND = "append"
    ROLLOVER = "rollover"
    SAVE = "save"


_TRANSITIONS: dict[tuple[BookState, BookEvent], BookState] = {
    (BookState.EMPTY, BookEvent.SET_COLUMNS): BookState.HEADER_WRITTEN,
    (BookState.EMPTY, BookEvent.APPEND): BookState.APPENDING,
    (BookState.EMPTY, BookEvent.SAVE): BookState.FINALIZED,
    (BookState.HEADER_WRITTEN, BookEvent.SET_TOTALS): BookState.HEADER_WRITTEN,
    (BookState.HEADER_WRITTEN, BookEvent.APPEND): BookState.APPENDING,
    (BookState.HEADER_WRITTEN, BookEvent.SAVE): BookState.FINALIZED,
    (BookState.APPENDING, BookEvent.APPEND): BookState.APPENDING,
    (BookState.APPENDING, BookEvent.ROLLOVER): BookState.APPENDING,
    (BookState.APPENDING, BookEvent.SAVE): BookState.FINALIZED,
}


def transition(state: BookState, event: BookEvent) -> BookState:
    """Return the state reached from *state* on *event*.

    Raises :class:`BookStateError` when *event* is not allowed in *state*.
    """
    try:
        return _TRANSITIONS[(state, event)]
    except KeyError:
        raise BookStateError(state.value, event.value) from None


@dataclasses.dataclass(frozen=True)
class SheetCursor:
    """Insertion position of the next data row on one sheet (1-based rows)."""

    sheet_number: int = 1
    first_row: int = 2
    rows_written: int = 0

    @property
    def next_row(self) -> int:
        return self.first_row + self.rows_written

    def is_full(self, max_rows: int) -> bool:
        return self.rows_written >= max_rows

    def advance(self) -> "SheetCursor":
        return dataclasses.replace(self, rows_written=self.rows_written + 1)

    def rolled_over(self, first_row: int) -> "SheetCursor":
        return SheetCursor(sheet_number=self.sheet_number + 1, first_row=first_row, rows_written=0)
