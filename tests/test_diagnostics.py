"""Diagnostic sinks and logging configuration."""

import logging

import pytest

import quill
from valuetest import Point


@pytest.fixture
def quill_logger():
    """Restore the quill logger after a test configures it."""
    logger = logging.getLogger(quill.LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


def test_default_sink_logs(caplog):
    with caplog.at_level(logging.DEBUG, logger=quill.LOGGER_NAME):
        assert quill.wrap([1]).integer() == 0
    assert "Value.integer() not available for kind: sequence" in caplog.text
    assert caplog.records[-1].levelno == logging.DEBUG
    assert caplog.records[-1].name == "quill"


def test_collecting_sink():
    diag = quill.Diagnostics(forward=False)
    value = quill.wrap(Point(1, 2), sink=diag)
    value.integer()
    value.len()
    assert diag.messages == [
        "Value.integer() not available for kind: record",
        "Value.len() not available for kind: record",
    ]
    assert len(diag) == 2
    assert repr(diag) == "<Diagnostics 2 messages>"
    diag.clear()
    assert not diag.messages


def test_collecting_sink_forwards(caplog):
    diag = quill.Diagnostics()
    with caplog.at_level(logging.DEBUG, logger=quill.LOGGER_NAME):
        quill.wrap_safe(None, sink=diag).bool()
    assert diag.messages == ["Value.bool() not available for kind: nil"]
    assert "Value.bool() not available for kind: nil" in caplog.text


def test_plain_callable_sink():
    messages = []
    quill.wrap(1j, sink=messages.append).float()
    assert messages == ["Value.float() not available for kind: other"]


def test_no_diagnostic_on_parse_failure():
    diag = quill.Diagnostics(forward=False)
    value = quill.wrap("twelve", sink=diag)
    assert value.integer() == 0
    assert value.float() == 0.0
    assert value.time() == quill.ZERO_TIME
    assert value.index(99).raw == ""
    assert not diag.messages


def test_configure_logging_env(monkeypatch, quill_logger):
    monkeypatch.setenv("QUILL_LOG_LEVEL", "debug")
    monkeypatch.delenv("QUILL_LOG_FILE", raising=False)
    logger = quill.configure_logging()
    assert logger is quill_logger
    assert logger.level == logging.DEBUG


def test_configure_logging_file(tmp_path, quill_logger):
    path = tmp_path / "logs" / "quill.log"
    quill.configure_logging(level="DEBUG", log_file=path)
    quill.wrap(None).len()
    assert "Value.len() not available for kind: nil" in path.read_text(encoding="utf-8")


def test_configure_logging_replaces_handlers(quill_logger):
    quill.configure_logging(level=logging.INFO)
    count = len(quill_logger.handlers)
    quill.configure_logging(level=logging.INFO)
    assert len(quill_logger.handlers) == count
    assert quill_logger.level == logging.INFO
