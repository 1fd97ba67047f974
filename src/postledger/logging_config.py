"""Logging setup for postledger.

Modules obtain loggers through :func:`get_logger`; nothing is emitted until
:func:`configure_logging` attaches a handler (the CLI does this at startup).
"""

__all__ = [
    "LOG_LEVEL_ENVVAR",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import logging
import sys
import threading
from typing import Any

LOG_LEVEL_ENVVAR = "POSTLEDGER_LOG_LEVEL"

_LOGGER_PREFIX = "postledger"
_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False
_lock = threading.Lock()

# Library default: stay silent unless the application configures logging.
logging.getLogger(_LOGGER_PREFIX).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the postledger namespace."""
    if name == _LOGGER_PREFIX or name.startswith(f"{_LOGGER_PREFIX}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(
    *,
    level: int | str = logging.WARNING,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Configure the postledger logger hierarchy (idempotent).

    Args:
        level: Level name ("INFO") or number
        stream: Stream for the default handler (stderr if None)
        handler: Use this handler instead of a stream handler
    """
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    root_logger.propagate = False

    h = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Reset logging configuration. FOR TESTING ONLY."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    for h in list(logger.handlers):
        if not isinstance(h, logging.NullHandler):
            logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
