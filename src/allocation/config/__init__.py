"""Config – 12-factor settings and validation errors."""
from allocation.config.settings import AllocationSettings, EnvSettingsLoader, Settings, get_settings
from allocation.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "AllocationSettings",
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "get_settings",
]
