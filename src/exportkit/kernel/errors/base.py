"""Root error class for the exportkit error hierarchy."""

from __future__ import annotations

import json
import re
from typing import Any

_WORD_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class BaseError(Exception):
    """Error with a stable ``code`` and a structured ``detail`` payload.

    Subclasses that do not declare ``default_code`` get the snake_case form of
    their class name. ``detail`` is meant for fields callers branch or log on
    (component, parameter, path, setting, ...); see :meth:`add_detail`.

    Args:
        message: Human-readable description.
        code: Overrides ``default_code``.
        detail: Initial structured context.
        cause: Original exception that triggered this error.
    """

    default_code: str = "base_error"

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "default_code" not in cls.__dict__:
            cls.default_code = _WORD_BOUNDARY.sub("_", cls.__name__).lower()

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def add_detail(self, **fields: Any) -> "BaseError":
        """Merge *fields* into ``detail``; ``None`` values are skipped."""
        self.detail.update({key: value for key, value in fields.items() if value is not None})
        return self

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for structured logs."""
        payload: dict[str, Any] = {
            "type": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
        return payload


__all__ = ["BaseError"]
