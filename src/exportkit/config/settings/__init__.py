"""Config settings – 12-factor env-based configuration."""
from exportkit.config.settings.base import Settings
from exportkit.config.settings.factory import SettingsFactory
from exportkit.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader"]
