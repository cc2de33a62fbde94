"""Infrastructure errors – I/O failures."""

from __future__ import annotations

from typing import Any

from exportkit.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a rule violation."""


class StorageError(InfrastructureError):
    """Reading or writing a stored artifact failed."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.path = path
        self.add_detail(path=path)


__all__ = ["InfrastructureError", "StorageError"]
