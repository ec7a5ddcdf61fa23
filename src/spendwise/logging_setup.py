"""Centralized logging configuration for the ``spendwise`` package.

- ``configure_logging(...)`` attaches a single ``StreamHandler`` to the
  package root logger. Entrypoints (the CLI) call it once at startup.
- ``get_logger(name)`` returns a logger and makes sure the package root
  logger has at least a ``NullHandler`` while unconfigured.

Library modules never attach their own handlers.
"""

import logging
import os
import sys
from typing import IO, Optional, Union

_PKG_LOGGER_NAME = "spendwise"
_CONFIGURED = False
_HANDLER_MARK = "_spendwise_handler"


def _parse_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.getenv("SPENDWISE_LOG_LEVEL")
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def configure_logging(
    level: Optional[Union[int, str]] = None,
    fmt: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Configure the package root logger exactly once.

    Args:
        level: Level as int or name (e.g. "DEBUG"). Falls back to the
            SPENDWISE_LOG_LEVEL environment variable, then INFO.
        fmt: Optional format string.
        stream: Output stream for the handler (the current sys.stderr by default)
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    # Replace placeholders and any handler left by an earlier configuration
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler) or getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    setattr(handler, _HANDLER_MARK, True)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s"))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # Avoid double emission via the root logger
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name with library-safe defaults."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
