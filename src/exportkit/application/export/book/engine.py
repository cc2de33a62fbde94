"""Application export – spreadsheet cell-writing engine port and openpyxl adapter."""
from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any, BinaryIO, Protocol, Sequence, runtime_checkable

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from exportkit.application.export.columns import DataType
from exportkit.application.export.limits import EXCEL_MAX_SHEET_NAME_LENGTH

__all__ = ["OpenpyxlWorkbookEngine", "WorkbookEngine", "coerce_cell_value"]

_NATIVE_TYPES = (str, int, float, Decimal, bool, dt.date, dt.datetime, dt.time)
_TRUE_TEXT = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_TEXT = frozenset({"0", "false", "no", "n", "off"})


@runtime_checkable
class WorkbookEngine(Protocol):
    """Port: primitive operations a spreadsheet book needs from a document library.

    Rows and columns are 1-based. ``sheet`` is whatever handle
    :meth:`create_sheet` returned.
    """

    def create_sheet(self, name: str) -> Any: ...

    def set_header(self, sheet: Any, row: int, names: Sequence[str]) -> None: ...

    def set_cell(
        self,
        sheet: Any,
        row: int,
        column: int,
        value: Any,
        data_type: DataType | None = None,
    ) -> None: ...

    def get_cell(self, sheet: Any, row: int, column: int) -> Any: ...

    def set_bold(self, sheet: Any, row: int, column: int) -> None: ...

    def set_column_width(self, sheet: Any, column: int, width: float) -> None: ...

    def autosize_columns(self, sheet: Any, max_width: float = 50) -> None: ...

    def set_number_format(
        self,
        sheet: Any,
        column: int,
        number_format: str,
        first_row: int,
        last_row: int,
    ) -> None: ...

    def save(self, stream: BinaryIO) -> None: ...

    def close(self) -> None: ...


def _naive(value: dt.datetime) -> dt.datetime:
    # Excel has no timezone support; store aware values as naive UTC.
    if value.tzinfo is None:
        return value
    return value.astimezone(dt.timezone.utc).replace(tzinfo=None)


def coerce_cell_value(value: Any, data_type: DataType | None) -> Any:  # noqa: PLR0911, PLR0912
    """Convert *value* into the Python type matching *data_type*.

    Values that cannot be converted are written as text rather than failing
    the export.
    """
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        value = _naive(value)

    if data_type is None:
        return value if isinstance(value, _NATIVE_TYPES) else str(value)

    if data_type is DataType.STRING:
        return value if isinstance(value, str) else str(value)

    if data_type is DataType.NUMBER:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float, Decimal)):
            return value
        text = str(value).strip()
        if not text:
            return None
        for convert in (int, float):
            try:
                return convert(text)
            except ValueError:
                continue
        return text

    if data_type is DataType.BOOLEAN:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float, Decimal)):
            return bool(value)
        text = str(value).strip().lower()
        if text in _TRUE_TEXT:
            return True
        if text in _FALSE_TEXT:
            return False
        return str(value)

    if data_type is DataType.DATE:
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, dt.date):
            return value
        try:
            return dt.date.fromisoformat(str(value).strip())
        except ValueError:
            return str(value)

    if isinstance(value, dt.datetime):
        return value
    if isinstance(value, dt.date):
        return dt.datetime.combine(value, dt.time())
    try:
        return _naive(dt.datetime.fromisoformat(str(value).strip()))
    except ValueError:
        return str(value)


class OpenpyxlWorkbookEngine:
    """:class:`WorkbookEngine` backed by an in-memory ``openpyxl`` workbook."""

    def __init__(self) -> None:
        self._workbook = Workbook()
        # openpyxl always creates one sheet; reuse it as the first book sheet.
        self._unused_default = self._workbook.active

    @property
    def workbook(self) -> Workbook:
        return self._workbook

    def create_sheet(self, name: str) -> Any:
        title = name[:EXCEL_MAX_SHEET_NAME_LENGTH]
        if self._unused_default is not None:
            sheet = self._unused_default
            sheet.title = title
            self._unused_default = None
            return sheet
        return self._workbook.create_sheet(title)

    def set_header(self, sheet: Any, row: int, names: Sequence[str]) -> None:
        for column, name in enumerate(names, start=1):
            sheet.cell(row=row, column=column, value=name)

    def set_cell(
        self,
        sheet: Any,
        row: int,
        column: int,
        value: Any,
        data_type: DataType | None = None,
    ) -> None:
        sheet.cell(row=row, column=column, value=coerce_cell_value(value, data_type))

    def get_cell(self, sheet: Any, row: int, column: int) -> Any:
        # Avoid materialising cells below the last written row.
        if row > sheet.max_row:
            return None
        return sheet.cell(row=row, column=column).value

    def set_bold(self, sheet: Any, row: int, column: int) -> None:
        sheet.cell(row=row, column=column).font = Font(bold=True)

    def set_column_width(self, sheet: Any, column: int, width: float) -> None:
        sheet.column_dimensions[get_column_letter(column)].width = width

    def autosize_columns(self, sheet: Any, max_width: float = 50) -> None:
        for col_cells in sheet.columns:
            max_len = max(len(str(cell.value if cell.value is not None else "")) for cell in col_cells)
            sheet.column_dimensions[col_cells[0].column_letter].width = min(max_len + 2, max_width)

    def set_number_format(
        self,
        sheet: Any,
        column: int,
        number_format: str,
        first_row: int,
        last_row: int,
    ) -> None:
        for row in range(first_row, last_row + 1):
            sheet.cell(row=row, column=column).number_format = number_format

    def save(self, stream: BinaryIO) -> None:
        self._workbook.save(stream)

    def close(self) -> None:
        self._workbook.close()
