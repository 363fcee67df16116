"""Config settings – env-based configuration."""
from event_chain.config.settings.chain import EventChainSettings, Settings, configure_logging
from event_chain.config.settings.factory import SettingsFactory
from event_chain.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = [
    "EnvSettingsLoader",
    "EventChainSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "configure_logging",
]
