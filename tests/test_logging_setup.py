"""Tests for logging configuration."""

import io
import logging
import sys

import pytest

from spendwise import logging_setup


@pytest.fixture
def fresh_logging(monkeypatch):
    """Give a test the package logger with no handlers and unconfigured state."""
    logger = logging.getLogger("spendwise")
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "propagate", logger.propagate)
    saved_level = logger.level
    yield logger
    logger.setLevel(saved_level)


def package_handlers(logger):
    return [h for h in logger.handlers if getattr(h, logging_setup._HANDLER_MARK, False)]


def test_configure_logging_writes_to_stream(fresh_logging):
    stream = io.StringIO()
    logging_setup.configure_logging("DEBUG", stream=stream)

    logging_setup.get_logger("spendwise.domain.test").debug("parsed %d lines", 3)

    assert "parsed 3 lines" in stream.getvalue()
    assert fresh_logging.level == logging.DEBUG


def test_default_stream_is_current_stderr(fresh_logging, monkeypatch):
    redirected = io.StringIO()
    monkeypatch.setattr(sys, "stderr", redirected)

    logging_setup.configure_logging("INFO")
    logging_setup.get_logger("spendwise.cli").info("imported 4 transactions")

    assert "imported 4 transactions" in redirected.getvalue()


def test_level_from_environment(fresh_logging, monkeypatch):
    monkeypatch.setenv("SPENDWISE_LOG_LEVEL", "warning")
    logging_setup.configure_logging(stream=io.StringIO())

    assert fresh_logging.level == logging.WARNING


def test_invalid_level_falls_back_to_info(fresh_logging):
    logging_setup.configure_logging("chatty", stream=io.StringIO())

    assert fresh_logging.level == logging.INFO


def test_configure_logging_runs_once(fresh_logging):
    logging_setup.configure_logging("INFO", stream=io.StringIO())
    logging_setup.configure_logging("DEBUG", stream=io.StringIO())

    assert len(package_handlers(fresh_logging)) == 1
    assert fresh_logging.level == logging.INFO


def test_reconfiguring_replaces_earlier_handler(fresh_logging, monkeypatch):
    first, second = io.StringIO(), io.StringIO()
    logging_setup.configure_logging("INFO", stream=first)
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    logging_setup.configure_logging("INFO", stream=second)

    logging_setup.get_logger("spendwise.domain.test").info("hello")

    assert len(package_handlers(fresh_logging)) == 1
    assert first.getvalue() == ""
    assert "hello" in second.getvalue()
