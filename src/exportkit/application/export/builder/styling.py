"""Application export – optional styling pass over a finished spreadsheet book."""
from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from exportkit.application.export.book import ExcelBook
from exportkit.application.export.columns import BookDataColumn, ExcelDataColumn

__all__ = [
    "ApplyBoldHeadersAction",
    "ApplyColumnFormatsAction",
    "ApplyColumnWidthAction",
    "ExcelBookStyleAction",
    "ExcelBookStyler",
    "default_style_actions",
]


@runtime_checkable
class ExcelBookStyleAction(Protocol):
    """Port: one decoration applied to every sheet of a book."""

    def apply(self, book: ExcelBook, columns: Sequence[BookDataColumn]) -> None: ...


class ApplyBoldHeadersAction:
    def apply(self, book: ExcelBook, columns: Sequence[BookDataColumn]) -> None:
        if not book.headers:
            return
        for sheet in book.sheets:
            for column_index in range(1, len(book.headers) + 1):
                book.engine.set_bold(sheet, 1, column_index)


class ApplyColumnWidthAction:
    """Auto-size every column (capped at ``max_width``), then apply fixed widths."""

    def __init__(self, max_width: float = 50) -> None:
        self.max_width = max_width

    def apply(self, book: ExcelBook, columns: Sequence[BookDataColumn]) -> None:
        for sheet in book.sheets:
            book.engine.autosize_columns(sheet, self.max_width)
            for column_index, column in enumerate(columns, start=1):
                if isinstance(column, ExcelDataColumn) and column.width is not None:
                    book.engine.set_column_width(sheet, column_index, column.width)


class ApplyColumnFormatsAction:
    """Apply ``ExcelDataColumn.number_format`` to the data rows of each sheet."""

    def apply(self, book: ExcelBook, columns: Sequence[BookDataColumn]) -> None:
        for sheet_index, sheet in enumerate(book.sheets):
            first_row = book.first_data_row(sheet_index)
            last_row = book.last_row(sheet_index)
            if last_row < first_row:
                continue
            for column_index, column in enumerate(columns, start=1):
                if isinstance(column, ExcelDataColumn) and column.number_format:
                    book.engine.set_number_format(sheet, column_index, column.number_format, first_row, last_row)


def default_style_actions() -> list[ExcelBookStyleAction]:
    return [ApplyColumnFormatsAction(), ApplyColumnWidthAction(), ApplyBoldHeadersAction()]


class ExcelBookStyler:
    """Runs style actions in order over a book."""

    def __init__(self, actions: Sequence[ExcelBookStyleAction] | None = None) -> None:
        self._actions = list(actions) if actions is not None else default_style_actions()

    @property
    def actions(self) -> list[ExcelBookStyleAction]:
        return list(self._actions)

    def apply_styles(self, book: ExcelBook, columns: Sequence[BookDataColumn]) -> None:
        for action in self._actions:
            action.apply(book, columns)
