"""Application-layer errors – cross-cutting concerns at use-case level."""

from __future__ import annotations

from exportkit.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""


__all__ = ["ApplicationError"]
