"""Application export – column descriptors and record field resolution."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Sequence

from exportkit.application.export.errors import (
    EmptyCollectionError,
    MaxColumnCountExceededError,
    MissingArgumentError,
)

__all__ = [
    "BookDataColumn",
    "CsvDataColumn",
    "DataType",
    "ExcelDataColumn",
    "Record",
    "header_names",
    "resolve_value",
    "validate_columns",
]

Record = Mapping[str, Any]
ValueFormatter = Callable[[Any], str]


class DataType(str, Enum):
    """Cell type hint carried to spreadsheet engines."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"


@dataclass(frozen=True)
class BookDataColumn:
    """Defines a single output column of a book."""

    field_name: str                          # record key to read from each row
    header_name: str                         # column header text
    data_type: DataType | None = None
    formatter: ValueFormatter | None = None

    def format_value(self, value: Any) -> Any:
        if self.formatter is None:
            return value
        return self.formatter(value)


@dataclass(frozen=True)
class CsvDataColumn(BookDataColumn):
    """Column of a delimited-text book."""


@dataclass(frozen=True)
class ExcelDataColumn(BookDataColumn):
    """Column of a spreadsheet book.

    ``number_format`` (e.g. ``"0.00"`` or ``"yyyy-mm-dd"``) and ``width`` are
    consumed by the styling pass, not by the book itself.
    """

    number_format: str | None = None
    width: float | None = None


def resolve_value(record: Record, column: BookDataColumn) -> Any:
    """Return the formatted value of *column* in *record*; a missing field reads as ``None``."""
    return column.format_value(record.get(column.field_name))


def validate_columns(
    columns: Iterable[BookDataColumn] | None,
    *,
    component: str,
    operation: str,
    max_count: int | None = None,
    parameter: str = "columns",
) -> list[BookDataColumn]:
    """Materialise *columns* and enforce the non-empty / max-count rules."""
    if columns is None:
        raise MissingArgumentError(component=component, operation=operation, parameter=parameter)
    column_list = list(columns)
    if not column_list:
        raise EmptyCollectionError(component=component, operation=operation, parameter=parameter)
    if max_count is not None and len(column_list) > max_count:
        raise MaxColumnCountExceededError(
            component=component,
            operation=operation,
            parameter=parameter,
            max_allowed=max_count,
            actual=len(column_list),
        )
    return column_list


def header_names(columns: Sequence[BookDataColumn]) -> list[str]:
    return [column.header_name for column in columns]
