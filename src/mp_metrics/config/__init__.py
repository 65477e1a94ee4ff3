"""Config – environment settings and their validation errors."""

from mp_metrics.config.settings import EnvSettingsLoader, MetricsSettings, Settings, SettingsLoader
from mp_metrics.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError


def load_settings() -> MetricsSettings:
    """Load :class:`MetricsSettings` from the process environment."""
    return EnvSettingsLoader().load(MetricsSettings)


__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MetricsSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "load_settings",
]
