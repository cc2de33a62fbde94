"""Config – 12-factor settings and loaders."""

from exportkit.config.settings import EnvSettingsLoader, Settings, SettingsFactory, SettingsLoader
from exportkit.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
