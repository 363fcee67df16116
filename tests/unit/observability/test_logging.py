"""Unit tests for structured logging helpers."""

from __future__ import annotations

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from event_chain.observability.logging import (
    DEFAULT_SENSITIVE_FIELDS,
    JsonLoggerFactory,
    SensitiveFieldsFilter,
    get_logger,
)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# SensitiveFieldsFilter
# ---------------------------------------------------------------------------


class TestSensitiveFieldsFilter:
    def test_redacts_known_sensitive_key(self) -> None:
        f = SensitiveFieldsFilter()
        assert f.redact({"signature": "0xabc", "chain_id": "0x42"}) == {
            "signature": "[REDACTED]",
            "chain_id": "0x42",
        }

    def test_redacts_all_default_sensitive_fields(self) -> None:
        f = SensitiveFieldsFilter()
        result = f.redact({name: "v" for name in DEFAULT_SENSITIVE_FIELDS})
        assert set(result.values()) == {SensitiveFieldsFilter.REDACTED}

    def test_case_insensitive_key_matching(self) -> None:
        assert SensitiveFieldsFilter().redact({"Private_Key": "k"})["Private_Key"] == "[REDACTED]"

    def test_custom_sensitive_fields(self) -> None:
        f = SensitiveFieldsFilter(frozenset({"seed"}))
        assert f.redact({"seed": "s", "signature": "x"}) == {"seed": "[REDACTED]", "signature": "x"}

    def test_redact_deep_nested(self) -> None:
        f = SensitiveFieldsFilter()
        data = {"event": {"signature": "0x1", "meta": {"token": "t", "n": 1}}}
        assert f.redact_deep(data) == {"event": {"signature": "[REDACTED]", "meta": {"token": "[REDACTED]", "n": 1}}}

    def test_redact_does_not_modify_original(self) -> None:
        data = {"password": "p"}
        SensitiveFieldsFilter().redact_deep(data)
        assert data == {"password": "p"}

    def test_processor_interface(self) -> None:
        assert SensitiveFieldsFilter()(None, "info", {"secret": "s"}) == {"secret": "[REDACTED]"}


# ---------------------------------------------------------------------------
# get_logger / JsonLoggerFactory
# ---------------------------------------------------------------------------


class TestGetLogger:
    def test_binds_initial_values(self) -> None:
        with capture_logs() as logs:
            get_logger("tests", chain_id="0x42").info("hello", count=1)
        assert logs == [{"chain_id": "0x42", "count": 1, "event": "hello", "log_level": "info"}]

    def test_without_values(self) -> None:
        with capture_logs() as logs:
            get_logger().warning("plain")
        assert logs[0]["log_level"] == "warning"


class TestJsonLoggerFactory:
    def test_configure_installs_single_handler(self, restore_logging: None) -> None:
        JsonLoggerFactory.configure(logging.DEBUG)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_json_output_is_redacted(self, restore_logging: None, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(logging.INFO, frozenset({"signature"}))
        get_logger("tests.json").info("event_chain.signed", signature="0xdead", chain_id="0x42")
        line = capsys.readouterr().err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "event_chain.signed"
        assert record["signature"] == "[REDACTED]"
        assert record["chain_id"] == "0x42"
        assert record["level"] == "info"
        assert record["logger"] == "tests.json"

    def test_console_renderer(self, restore_logging: None, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(logging.INFO, json=False)
        get_logger("tests.console").info("readable")
        assert "readable" in capsys.readouterr().err
