"""Application export – ExportSettings."""
from __future__ import annotations

import dataclasses

from exportkit.application.export.limits import MAX_DATA_ROWS_PER_SHEET
from exportkit.config import Settings

__all__ = ["ExportSettings", "STORAGE_FILE", "STORAGE_MEMORY"]

STORAGE_MEMORY = "memory"
STORAGE_FILE = "file"


@dataclasses.dataclass
class ExportSettings(Settings):
    """Limits and storage options of the export engine.

    Read from ``EXPORTS_*`` environment variables by
    :class:`~exportkit.config.EnvSettingsLoader`.
    """

    _prefix = "EXPORTS"

    max_rows_per_book: int = MAX_DATA_ROWS_PER_SHEET
    max_rows_per_fetch: int = 10_000
    max_rows_per_sheet: int = MAX_DATA_ROWS_PER_SHEET
    max_parallel_books: int = 1
    sheet_name_prefix: str = "Sheet"
    storage: str = STORAGE_MEMORY
    work_directory: str = ""          # empty: system temp directory
    csv_delimiter: str = ","
    csv_bom: bool = False
    strict_fields: bool = False

    def _validate(self) -> None:
        self._require_positive("max_rows_per_book", "max_rows_per_fetch", "max_rows_per_sheet", "max_parallel_books")
        self._require_at_most("max_rows_per_sheet", MAX_DATA_ROWS_PER_SHEET)
        self._require_one_of("storage", (STORAGE_MEMORY, STORAGE_FILE))
        if len(self.csv_delimiter) != 1:
            raise self._invalid("csv_delimiter", "must be one character")
        if not self.sheet_name_prefix.strip():
            raise self._invalid("sheet_name_prefix", "must not be blank")
