"""Config validation errors.

Each error names the environment variable an operator has to fix
(``EXPORTS_MAX_ROWS_PER_BOOK``) and keeps the dataclass field it maps to.
"""
from __future__ import annotations

from exportkit.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be loaded or constructed."""


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, *, field_name: str | None = None) -> None:
        super().__init__(f"{setting_name} is required but not set")
        self.setting_name = setting_name
        self.field_name = field_name or setting_name
        self.add_detail(setting=setting_name, field=self.field_name)


class InvalidSettingValueError(ConfigError):
    """A setting is present but out of range or unparseable."""

    default_code = "invalid_setting_value"

    def __init__(
        self,
        setting_name: str,
        value: object,
        reason: str,
        *,
        field_name: str | None = None,
    ) -> None:
        super().__init__(f"{setting_name}={value!r} rejected: {reason}")
        self.setting_name = setting_name
        self.field_name = field_name or setting_name
        self.value = value
        self.reason = reason
        self.add_detail(setting=setting_name, field=self.field_name, value=repr(value), reason=reason)


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
