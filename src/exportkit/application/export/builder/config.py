"""Application export – BookBuilderConfig."""
from __future__ import annotations

from dataclasses import dataclass

from exportkit.application.export.errors import ArgumentOutOfRangeError, MissingArgumentError
from exportkit.application.export.row_source import FetchData

__all__ = ["BookBuilderConfig"]


@dataclass(frozen=True)
class BookBuilderConfig:
    """Row source and batch size shared by every builder of an export."""

    fetch_data: FetchData
    max_rows_per_fetch: int = 10_000

    def __post_init__(self) -> None:
        if self.fetch_data is None:
            raise MissingArgumentError(
                component="BookBuilderConfig", operation="__init__", parameter="fetch_data"
            )
        if not callable(self.fetch_data):
            raise ArgumentOutOfRangeError(
                "fetch_data must be an async callable (offset, count, cancel_token).",
                component="BookBuilderConfig",
                operation="__init__",
                parameter="fetch_data",
            )
        if self.max_rows_per_fetch <= 0:
            raise ArgumentOutOfRangeError(
                f"max_rows_per_fetch must be > 0, got {self.max_rows_per_fetch}.",
                component="BookBuilderConfig",
                operation="__init__",
                parameter="max_rows_per_fetch",
            )
