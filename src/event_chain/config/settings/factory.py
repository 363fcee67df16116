"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from event_chain.config.settings.chain import Settings
from event_chain.config.settings.loaders import SettingsLoader
from event_chain.config.validation import ConfigError

T = TypeVar("T", bound=Settings)


def _field_default(field: dataclasses.Field[Any]) -> Any:
    if field.default is not dataclasses.MISSING:
        return field.default
    if field.default_factory is not dataclasses.MISSING:
        return field.default_factory()
    return dataclasses.MISSING


class SettingsFactory:
    """Merge several loaders and explicit overrides into one settings object.

    Loaders run in order.  A later loader only wins for fields it actually
    changed from the default, so an environment without ``EVENT_CHAIN_*``
    variables does not reset values set by an earlier source.  *overrides*
    take the highest priority.  Loader errors propagate.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """
        Parameters
        ----------
        settings_cls:
            The :class:`~event_chain.config.settings.Settings` subclass to build.
        loaders:
            Ordered :class:`~event_chain.config.settings.SettingsLoader` instances.
        overrides:
            Field values applied after all loaders; handy in tests.

        Raises
        ------
        ConfigError
            A loader failed, or the merged values do not build a valid instance.
        """
        fields = dataclasses.fields(settings_cls)  # type: ignore[arg-type]
        merged: dict[str, Any] = {}

        for loader in loaders or []:
            instance = loader.load(settings_cls)
            for field in fields:
                value = getattr(instance, field.name)
                if field.name not in merged or value != _field_default(field):
                    merged[field.name] = value

        if overrides:
            unknown = set(overrides) - {field.name for field in fields}
            if unknown:
                raise ConfigError(f"Unknown settings for {settings_cls.__name__}: {sorted(unknown)}")
            merged.update(overrides)

        try:
            return settings_cls(**merged)
        except ConfigError:
            raise
        except TypeError as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}", cause=exc) from exc


__all__ = ["SettingsFactory"]
