"""Application export – error types.

Argument errors carry a structured ``component`` / ``operation`` /
``parameter`` triple instead of a free-form header, rendered into the
message as ``[component][operation](parameter)``.
"""
from __future__ import annotations

from typing import Any

from exportkit.kernel.errors import InvariantViolationError, ValidationError

__all__ = [
    "ArgumentOutOfRangeError",
    "BookStateError",
    "EmptyCollectionError",
    "ExportArgumentError",
    "ExportResultStateError",
    "MaxColumnCountExceededError",
    "MissingArgumentError",
    "MissingFieldError",
    "UnsupportedFileTypeError",
]


class ExportArgumentError(ValidationError):
    """Invalid input detected at the boundary where it is first used."""

    def __init__(
        self,
        reason: str,
        *,
        component: str,
        operation: str,
        parameter: str,
        **kwargs: Any,
    ) -> None:
        self.component = component
        self.operation = operation
        self.parameter = parameter
        super().__init__(f"{self.header} Error: {reason}", **kwargs)
        self.add_detail(component=component, operation=operation, parameter=parameter)

    @property
    def header(self) -> str:
        return f"[{self.component}][{self.operation}]({self.parameter})"


class EmptyCollectionError(ExportArgumentError):
    """A collection that must hold at least one item is empty."""

    default_code = "empty_collection"

    def __init__(self, *, component: str, operation: str, parameter: str) -> None:
        super().__init__(
            f'An empty collection has been detected. Parameter "{parameter}" cannot be empty.',
            component=component,
            operation=operation,
            parameter=parameter,
        )


class MissingArgumentError(ExportArgumentError):
    """A required argument is ``None``."""

    default_code = "missing_argument"

    def __init__(self, *, component: str, operation: str, parameter: str) -> None:
        super().__init__(
            f'The "{parameter}" parameter cannot be None.',
            component=component,
            operation=operation,
            parameter=parameter,
        )


class MaxColumnCountExceededError(ExportArgumentError):
    """More columns were supplied than the output format supports."""

    default_code = "max_column_count_exceeded"

    def __init__(
        self,
        *,
        component: str,
        operation: str,
        parameter: str,
        max_allowed: int,
        actual: int,
    ) -> None:
        super().__init__(
            f"Column count cannot exceed max allowed columns. "
            f"Max allowed column count is {max_allowed}, got {actual}.",
            component=component,
            operation=operation,
            parameter=parameter,
            detail={"max_allowed": max_allowed, "actual": actual},
        )
        self.max_allowed = max_allowed
        self.actual = actual


class ArgumentOutOfRangeError(ExportArgumentError):
    """A numeric or textual argument is outside its accepted range."""

    default_code = "argument_out_of_range"


class MissingFieldError(ExportArgumentError):
    """A record has no value for a column's field (strict mode only)."""

    default_code = "missing_field"

    def __init__(
        self,
        field_name: str,
        *,
        component: str,
        operation: str,
        record_index: int,
    ) -> None:
        super().__init__(
            f'Field "{field_name}" was not found in record {record_index}.',
            component=component,
            operation=operation,
            parameter="records",
            detail={"field_name": field_name, "record_index": record_index},
        )
        self.field_name = field_name
        self.record_index = record_index


class UnsupportedFileTypeError(ExportArgumentError):
    """No book builder is registered for the requested file type."""

    default_code = "unsupported_file_type"

    def __init__(self, file_type: object, *, component: str, operation: str) -> None:
        super().__init__(
            f"Unsupported export format: {file_type!r}",
            component=component,
            operation=operation,
            parameter="file_type",
        )
        self.file_type = file_type


class BookStateError(InvariantViolationError):
    """A book operation was called in a lifecycle state that forbids it."""

    def __init__(self, state: str, event: str) -> None:
        super().__init__(
            f"Cannot {event} a book in state {state}",
            detail={"state": state, "event": event},
        )
        self.state = state
        self.event = event


class ExportResultStateError(InvariantViolationError):
    """An export result was read before being written, or written twice."""
