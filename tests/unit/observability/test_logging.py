"""Unit tests for observability logging."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from flagsync.kernel.errors import WriteFailedError
from flagsync.observability.logging import JsonLoggerFactory, Logger, add_error_code, get_logger


class TestAddErrorCode:
    def test_flattens_flagsync_error(self) -> None:
        err = WriteFailedError("rejected", operation="insert")
        event = add_error_code(None, "error", {"event": "x", "exc": err})
        assert event == {"event": "x", "error_code": "write_failed", "error": "rejected"}

    def test_plain_exception_uses_repr(self) -> None:
        event = add_error_code(None, "error", {"event": "x", "exc": ValueError("bad")})
        assert event["error"] == "ValueError('bad')"
        assert "error_code" not in event

    def test_no_exc_is_untouched(self) -> None:
        assert add_error_code(None, "info", {"event": "x"}) == {"event": "x"}


class TestGetLogger:
    def test_satisfies_logger_protocol(self) -> None:
        log: Logger = get_logger("flagsync.test")
        for method in ("debug", "info", "warning", "error"):
            assert callable(getattr(log, method))

    def test_binds_initial_values(self) -> None:
        with structlog.testing.capture_logs() as captured:
            get_logger("flagsync.test", collection="features").info("hello")
        assert captured == [{"collection": "features", "event": "hello", "log_level": "info"}]


class TestJsonLoggerFactory:
    def test_configures_root_handler(self) -> None:
        JsonLoggerFactory.configure("warning")
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

    def test_emits_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(logging.INFO, json=True)
        get_logger("flagsync.json").error("boom", exc=WriteFailedError("nope", operation="delete"))
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "boom"
        assert payload["error_code"] == "write_failed"
        assert payload["level"] == "error"

    def test_console_renderer(self, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(logging.INFO, json=False)
        get_logger("flagsync.console").info("plain_event")
        assert "plain_event" in capsys.readouterr().err
