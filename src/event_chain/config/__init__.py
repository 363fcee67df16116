"""Config – 12-factor settings and their validation errors."""

from event_chain.config.settings import (
    EnvSettingsLoader,
    EventChainSettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
    configure_logging,
)
from event_chain.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "EventChainSettings",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "configure_logging",
]
