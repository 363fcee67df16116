"""Config settings – Settings base class and EventChainSettings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar, Mapping

from event_chain.config.settings.loaders import EnvSettingsLoader
from event_chain.config.validation import InvalidSettingValueError
from event_chain.observability.logging import DEFAULT_SENSITIVE_FIELDS, JsonLoggerFactory

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class EventChainSettings(Settings):
    """Runtime settings, read from ``EVENT_CHAIN_*`` environment variables.

    ``default_network_id`` is the EVM chain id used when callers create chains
    without naming a network.
    """

    _prefix = "EVENT_CHAIN"

    log_level: str = "INFO"
    json_logs: bool = True
    sensitive_fields: tuple[str, ...] = tuple(sorted(DEFAULT_SENSITIVE_FIELDS))
    default_network_id: int = 1

    def _validate(self) -> None:
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise InvalidSettingValueError("log_level", self.log_level, f"expected one of {_LOG_LEVELS}")
        if not 0 <= self.default_network_id <= 0xFFFFFFFF:
            raise InvalidSettingValueError(
                "default_network_id", self.default_network_id, "must fit in an unsigned 32-bit integer"
            )
        self.sensitive_fields = tuple(self.sensitive_fields)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EventChainSettings":
        return EnvSettingsLoader(environ).load(cls)


def configure_logging(settings: EventChainSettings) -> None:
    """Apply the logging part of *settings* to structlog and the root logger."""
    JsonLoggerFactory.configure(
        level=getattr(logging, settings.log_level),
        sensitive_fields=frozenset(settings.sensitive_fields),
        json=settings.json_logs,
    )


__all__ = ["EventChainSettings", "Settings", "configure_logging"]
