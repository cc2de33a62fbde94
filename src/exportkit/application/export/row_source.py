"""Application export – row source port and offset adapter."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Protocol, Sequence, runtime_checkable

from exportkit.application.export.columns import Record
from exportkit.kernel.cancellation import CancellationToken

__all__ = ["FetchData", "OffsetRowSource", "RowSource"]


@runtime_checkable
class FetchData(Protocol):
    """Caller-supplied paged fetch.

    ``offset`` and ``count`` are in logical total-row space; an offset past
    the end of the data must return an empty sequence.
    """

    def __call__(
        self,
        offset: int,
        count: int,
        cancel_token: CancellationToken | None,
    ) -> Awaitable[Sequence[Record]]: ...


@runtime_checkable
class RowSource(Protocol):
    """Port consumed by book builders."""

    async def fetch(
        self,
        start: int,
        count: int,
        cancel_token: CancellationToken | None = None,
    ) -> Sequence[Record] | None: ...


@dataclass(frozen=True)
class OffsetRowSource:
    """Shifts every fetch by ``offset`` so a book can read from row zero."""

    fetch_data: FetchData
    offset: int = 0

    async def fetch(
        self,
        start: int,
        count: int,
        cancel_token: CancellationToken | None = None,
    ) -> Sequence[Record] | None:
        return await self.fetch_data(self.offset + start, count, cancel_token)
