"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, Collection

from exportkit.config.validation.errors import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Dataclass whose fields map to ``<PREFIX>_<FIELD>`` environment variables.

    Subclasses set ``_prefix`` and express their rules in :meth:`_validate`
    with the ``_require_*`` helpers, so a rejected value is reported under the
    variable name an operator would set.
    """

    _prefix: ClassVar[str] = ""

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to check field values after construction."""

    def _invalid(self, field_name: str, reason: str) -> InvalidSettingValueError:
        return InvalidSettingValueError(
            self.env_key(field_name),
            getattr(self, field_name),
            reason,
            field_name=field_name,
        )

    def _require_positive(self, *field_names: str) -> None:
        for name in field_names:
            if getattr(self, name) <= 0:
                raise self._invalid(name, "must be > 0")

    def _require_at_most(self, field_name: str, limit: int) -> None:
        if getattr(self, field_name) > limit:
            raise self._invalid(field_name, f"must be <= {limit}")

    def _require_one_of(self, field_name: str, choices: Collection[Any]) -> None:
        if getattr(self, field_name) not in choices:
            expected = ", ".join(repr(choice) for choice in choices)
            raise self._invalid(field_name, f"expected one of {expected}")


__all__ = ["Settings"]
