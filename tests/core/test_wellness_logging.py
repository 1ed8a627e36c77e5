"""Tests for structured logging module."""

from __future__ import annotations

import json
import logging

import pytest

from wellness.core.logging import (
    _NOISE_LOGGERS,
    _user_context,
    add_otel_context,
    add_user_context,
    configure_logging,
    get_user_context,
    reset_user_context,
    set_user_context,
)

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _reset_logging():
    """Reset logging and user context between tests."""
    token = _user_context.set(None)
    yield
    _user_context.reset(token)
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.WARNING)
    for name in _NOISE_LOGGERS:
        logging.getLogger(name).handlers.clear()


class TestUserContext:
    def test_default_is_none(self):
        assert get_user_context() is None

    def test_set_and_reset(self):
        token = set_user_context("user-1")
        assert get_user_context() == "user-1"
        reset_user_context(token)
        assert get_user_context() is None


class TestProcessors:
    def test_user_context_injected(self):
        set_user_context("user-1")
        event = add_user_context(None, "info", {"event": "hello"})
        assert event["user_id"] == "user-1"

    def test_user_context_none_when_unset(self):
        assert add_user_context(None, "info", {})["user_id"] is None

    def test_otel_context_zeroed_without_span(self):
        event = add_otel_context(None, "info", {})
        assert event["trace_id"] == "0" * 32
        assert event["span_id"] == "0" * 16


class TestConfigureLogging:
    def test_single_console_handler(self):
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_level_applied(self):
        configure_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_noise_loggers_quieted(self):
        configure_logging()
        for name in _NOISE_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_json_file_output(self, tmp_path):
        log_root = tmp_path / "logs"
        configure_logging(fmt="json", log_root=log_root)

        token = set_user_context("user-9")
        try:
            logging.getLogger("wellness.test").warning("dose logged")
        finally:
            reset_user_context(token)
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = (log_root / "app.log").read_text().strip().splitlines()
        record = json.loads(lines[-1])
        assert record["event"] == "dose logged"
        assert record["user_id"] == "user-9"
        assert record["level"] == "warning"
        assert (log_root / "http.log").exists()

    def test_reconfigure_does_not_stack_transport_handlers(self, tmp_path):
        configure_logging(log_root=tmp_path / "first")
        first = logging.getLogger("httpx").handlers[0]
        configure_logging(log_root=tmp_path / "second")

        for name in _NOISE_LOGGERS:
            handlers = logging.getLogger(name).handlers
            assert len(handlers) == 1
            assert handlers[0].baseFilename.endswith("second/http.log")
        assert first.stream is None
        assert len(logging.getLogger().handlers) == 2

    def test_reconfigure_without_log_root_drops_file_handlers(self, tmp_path):
        configure_logging(log_root=tmp_path)
        configure_logging()

        for name in _NOISE_LOGGERS:
            assert logging.getLogger(name).handlers == []
        assert len(logging.getLogger().handlers) == 1
