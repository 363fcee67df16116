"""Unit tests for config settings, loaders and the settings factory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar

import pytest
import structlog

from event_chain.config import (
    ConfigError,
    EnvSettingsLoader,
    EventChainSettings,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    Settings,
    SettingsFactory,
    configure_logging,
)
from event_chain.observability.logging import DEFAULT_SENSITIVE_FIELDS


@dataclass
class AppSettings(Settings):
    _prefix: ClassVar[str] = "APP"

    host: str = "localhost"
    port: int = 8080
    debug: bool = False
    allowed_origins: list[str] = field(default_factory=list)


@dataclass
class RequiredSettings(Settings):
    _prefix: ClassVar[str] = "REQ"

    api_key: str


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_loads_typed_values(self) -> None:
        settings = EnvSettingsLoader(
            {"APP_HOST": "example.com", "APP_PORT": "9000", "APP_DEBUG": "yes", "APP_ALLOWED_ORIGINS": "a, b,"}
        ).load(AppSettings)
        assert settings == AppSettings(host="example.com", port=9000, debug=True, allowed_origins=["a", "b"])

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_PORT", "443")
        assert EnvSettingsLoader().load(AppSettings).port == 443

    @pytest.mark.parametrize("raw", ["false", "False", "0", "no", "off"])
    def test_falsy_booleans(self, raw: str) -> None:
        assert EnvSettingsLoader({"APP_DEBUG": raw}).load(AppSettings).debug is False

    def test_defaults_when_absent(self) -> None:
        assert EnvSettingsLoader({}).load(AppSettings) == AppSettings()

    def test_invalid_bool(self) -> None:
        with pytest.raises(InvalidSettingValueError, match="APP_DEBUG"):
            EnvSettingsLoader({"APP_DEBUG": "maybe"}).load(AppSettings)

    def test_invalid_int(self) -> None:
        with pytest.raises(InvalidSettingValueError, match="expected an integer"):
            EnvSettingsLoader({"APP_PORT": "eighty"}).load(AppSettings)

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader({}).load(RequiredSettings)
        assert exc_info.value.setting_name == "REQ_API_KEY"
        assert exc_info.value.detail == {"setting": "REQ_API_KEY"}

    def test_invalid_value_detail(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader({"APP_PORT": "eighty"}).load(AppSettings)
        assert str(exc_info.value) == "Invalid value 'eighty' for APP_PORT: expected an integer"
        assert exc_info.value.detail["setting"] == "APP_PORT"


# ---------------------------------------------------------------------------
# EventChainSettings
# ---------------------------------------------------------------------------


class TestEventChainSettings:
    def test_defaults(self) -> None:
        settings = EventChainSettings()
        assert settings.log_level == "INFO"
        assert settings.json_logs is True
        assert set(settings.sensitive_fields) == DEFAULT_SENSITIVE_FIELDS
        assert settings.default_network_id == 1

    def test_from_env(self) -> None:
        settings = EventChainSettings.from_env(
            {
                "EVENT_CHAIN_LOG_LEVEL": "debug",
                "EVENT_CHAIN_JSON_LOGS": "false",
                "EVENT_CHAIN_SENSITIVE_FIELDS": "signature,api_key",
                "EVENT_CHAIN_DEFAULT_NETWORK_ID": "1337",
            }
        )
        assert settings.log_level == "DEBUG"
        assert settings.json_logs is False
        assert settings.sensitive_fields == ("signature", "api_key")
        assert settings.default_network_id == 1337

    def test_invalid_log_level(self) -> None:
        with pytest.raises(InvalidSettingValueError, match="log_level"):
            EventChainSettings(log_level="LOUD")

    @pytest.mark.parametrize("network_id", [-1, 2**32])
    def test_network_id_range(self, network_id: int) -> None:
        with pytest.raises(InvalidSettingValueError, match="default_network_id"):
            EventChainSettings(default_network_id=network_id)

    def test_errors_are_config_errors(self) -> None:
        with pytest.raises(ConfigError):
            EventChainSettings.from_env({"EVENT_CHAIN_DEFAULT_NETWORK_ID": "-5"})


# ---------------------------------------------------------------------------
# SettingsFactory
# ---------------------------------------------------------------------------


class TestSettingsFactory:
    def test_no_loaders_uses_defaults(self) -> None:
        assert SettingsFactory.create(AppSettings) == AppSettings()

    def test_later_loader_wins_only_for_changed_fields(self) -> None:
        settings = SettingsFactory.create(
            AppSettings,
            loaders=[
                EnvSettingsLoader({"APP_HOST": "first", "APP_PORT": "1"}),
                EnvSettingsLoader({"APP_PORT": "2"}),
            ],
        )
        assert settings.host == "first"
        assert settings.port == 2

    def test_overrides_win(self) -> None:
        settings = SettingsFactory.create(
            AppSettings, loaders=[EnvSettingsLoader({"APP_PORT": "1"})], overrides={"port": 3}
        )
        assert settings.port == 3

    def test_unknown_override(self) -> None:
        with pytest.raises(ConfigError, match="Unknown settings"):
            SettingsFactory.create(AppSettings, overrides={"colour": "blue"})

    def test_missing_required(self) -> None:
        with pytest.raises(ConfigError):
            SettingsFactory.create(RequiredSettings)

    def test_required_from_override(self) -> None:
        assert SettingsFactory.create(RequiredSettings, overrides={"api_key": "k"}).api_key == "k"

    def test_loader_errors_propagate(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            SettingsFactory.create(AppSettings, loaders=[EnvSettingsLoader({"APP_PORT": "x"})])

    def test_validation_runs_on_merged_values(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            SettingsFactory.create(EventChainSettings, overrides={"log_level": "nope"})


class TestConfigureLogging:
    def test_sets_root_level(self, restore_logging: None) -> None:
        configure_logging(EventChainSettings(log_level="warning", json_logs=False))
        assert logging.getLogger().level == logging.WARNING
        assert len(logging.getLogger().handlers) == 1
