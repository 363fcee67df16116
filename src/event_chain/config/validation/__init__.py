"""Config validation errors, re-exported from the kernel hierarchy."""
from event_chain.kernel.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
