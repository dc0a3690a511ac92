"""Logging configuration for the wordnet-dict command line and server."""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "wordnet_dict"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _parse_level(value: str | int | None) -> int:
    """Map a level name (e.g. 'debug') or number to a logging constant."""
    if value is None:
        return logging.INFO
    if isinstance(value, int):
        return value
    level = getattr(logging, value.strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    level: str | int | None = "INFO",
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Attach a single stderr handler to the package logger and return it.

    Calling it again replaces the handler installed by the previous call.
    """
    log = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(log.handlers):
        if getattr(handler, "_wordnet_dict", False):
            log.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    handler._wordnet_dict = True  # type: ignore[attr-defined]
    log.addHandler(handler)
    log.setLevel(_parse_level(level))
    return log
