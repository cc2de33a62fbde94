"""Kernel – CancellationToken."""
from __future__ import annotations

import asyncio

__all__ = ["CancellationToken", "raise_if_cancelled"]


class CancellationToken:
    """Cooperative cancellation flag threaded through a long-running export.

    Holders poll it at batch boundaries; once cancelled it stays cancelled.
    An honoured cancellation surfaces as :class:`asyncio.CancelledError`,
    the same signal native task cancellation produces.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: str | None = None

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        if not self._cancelled:
            self._cancelled = True
            self._reason = reason

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise asyncio.CancelledError(self._reason or "Operation cancelled")

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"


def raise_if_cancelled(token: CancellationToken | None) -> None:
    """Raise :class:`asyncio.CancelledError` when *token* has been cancelled.

    ``None`` means "not cancellable" and is a no-op.
    """
    if token is not None:
        token.raise_if_cancelled()
