"""Domain errors – rule and invariant violations."""

from __future__ import annotations

from typing import Any

from exportkit.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a rule / invariant is violated."""


class InvariantViolationError(DomainError):
    """An object was driven into a state its invariants forbid."""

    default_code = "invariant_violation"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


__all__ = [
    "DomainError",
    "InvariantViolationError",
    "ValidationError",
]
