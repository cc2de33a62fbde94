"""Application export – format limits and chunk arithmetic."""
from __future__ import annotations

__all__ = [
    "EXCEL_MAX_COLUMN_COUNT",
    "EXCEL_MAX_ROW_COUNT",
    "EXCEL_MAX_SHEET_NAME_LENGTH",
    "MAX_DATA_ROWS_PER_SHEET",
    "calculate_number_of_chunks",
]

EXCEL_MAX_ROW_COUNT = 1_048_576
EXCEL_MAX_COLUMN_COUNT = 16_384
EXCEL_MAX_SHEET_NAME_LENGTH = 31

# Header row plus an optional totals row must still fit on a sheet.
MAX_DATA_ROWS_PER_SHEET = EXCEL_MAX_ROW_COUNT - 2


def calculate_number_of_chunks(total: int, chunk_size: int) -> int:
    """Return ``max(1, ceil(total / chunk_size))``.

    Zero rows still yield one (empty) chunk so every export produces a file.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    if total <= 0:
        return 1
    return -(-total // chunk_size)

