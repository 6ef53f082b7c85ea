"""Unit tests for structured logging configuration."""

import json
import logging

import pytest
import structlog

from legisvote.application.services.base import LoggingMixin
from legisvote.infrastructure.observability.logging import (
    _get_log_level,
    configure_structlog,
)


@pytest.fixture(autouse=True)
def _restore_structlog():
    yield
    structlog.reset_defaults()


class TestConfigureStructlog:
    """Tests for configure_structlog function."""

    def test_production_renders_json(self) -> None:
        configure_structlog(environment="production")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_development_renders_console(self) -> None:
        configure_structlog(environment="development")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_production_line_is_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_structlog(environment="production")

        structlog.get_logger("test").info("cast_completed", value="favor")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "cast_completed"
        assert payload["value"] == "favor"
        assert payload["level"] == "info"
        assert "timestamp" in payload


class TestLogLevel:
    """Tests for LOG_LEVEL resolution."""

    def test_default_is_info(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert _get_log_level() == logging.INFO

    def test_explicit_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert _get_log_level() == logging.DEBUG

    def test_unknown_level_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        assert _get_log_level() == logging.INFO


class TestLoggingMixin:
    """Tests for the service logging mixin."""

    def test_operation_context_is_bound(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_structlog(environment="production")

        class Ledger(LoggingMixin):
            def __init__(self) -> None:
                self._init_logger(component="ledger")

        Ledger()._log_operation("cast", voter_id="v1").info("cast_started")

        payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert payload["component"] == "ledger"
        assert payload["operation"] == "cast"
        assert payload["voter_id"] == "v1"
