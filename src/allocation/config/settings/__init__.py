"""Config settings – 12-factor env-based configuration."""
from allocation.config.settings.base import AllocationSettings, Settings
from allocation.config.settings.loaders import EnvSettingsLoader, SettingsLoader, get_settings

__all__ = ["AllocationSettings", "EnvSettingsLoader", "Settings", "SettingsLoader", "get_settings"]
