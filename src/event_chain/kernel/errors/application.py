"""Application-layer errors – cross-cutting concerns at use-case level."""

from __future__ import annotations

from typing import Any

from event_chain.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class ConfigError(ApplicationError):
    """Settings could not be loaded from the environment or failed validation."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"Environment variable {setting_name} is required but not set",
            detail={"setting": setting_name},
            **kwargs,
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but its value cannot be used.

    Raised both for values the loader cannot coerce (``EVENT_CHAIN_JSON_LOGS=maybe``)
    and for values a settings class rejects, such as a network id outside uint32.
    """

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"Invalid value {value!r} for {setting_name}: {reason}",
            detail={"setting": setting_name, "value": value, "reason": reason},
            **kwargs,
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = [
    "ApplicationError",
    "ConfigError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
]
