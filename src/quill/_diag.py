"""Diagnostic sink for unsupported value operations.

Operations that meet a kind they cannot handle never fail, they report
a message to a sink and return a fallback. A sink is any callable that
accepts one formatted message. Values carry their sink and hand it on to
every value they derive, so an evaluator can route diagnostics per render.
"""

__all__ = ["log_sink", "Diagnostics", "configure_logging", "LOGGER_NAME"]

import logging
import os
from pathlib import Path

LOGGER_NAME = "quill"

logger = logging.getLogger(LOGGER_NAME)


def log_sink(message):
    """Default sink, forwards the message to the quill logger at debug level."""
    logger.debug(message)


class Diagnostics:
    """Sink that collects messages while still forwarding them to logging.

    Args:
        forward: (bool) Also send every message to the quill logger

    Attributes:
        messages: (list[str]) Messages received, in order
    """

    def __init__(self, forward=True):
        self.messages = []
        self.forward = forward

    def __call__(self, message):
        self.messages.append(message)
        if self.forward:
            logger.debug(message)

    def __len__(self):
        return len(self.messages)

    def __repr__(self):
        return f"<Diagnostics {len(self.messages)} messages>"

    def clear(self):
        """Forget collected messages."""
        self.messages.clear()


_handlers = []


def configure_logging(level=None, log_file=None):
    """Attach handlers to the quill logger.

    Settings come from the environment unless given explicitly:
    ``QUILL_LOG_LEVEL`` (default WARNING) and ``QUILL_LOG_FILE``.
    Calling this again replaces the handlers installed previously.

    Args:
        level: (str | int | None) Logging level name or number
        log_file: (str | Path | None) Optional file to also log into
    Returns:
        (logging.Logger) The configured quill logger
    """
    if level is None:
        level = os.getenv("QUILL_LOG_LEVEL", "WARNING")
    if log_file is None:
        log_file = os.getenv("QUILL_LOG_FILE") or None
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    for handler in _handlers:
        logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", "%Y-%m-%d %H:%M:%S"
    )
    handlers = [logging.StreamHandler()]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        _handlers.append(handler)

    logger.setLevel(level)
    return logger
