"""
Diagnostics channel configuration.

applog never reports its own problems through the records it writes: remote
delivery failures, discarded sink errors and setup messages go to the stdlib
'applog' logger, rendered as JSON on stderr so they never mix with the
records on stdout.

Each diagnostic line carries ``"channel": "diagnostics"`` so a collector that
merges stdout and stderr can still tell the two apart.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from pythonjsonlogger.json import JsonFormatter

DIAGNOSTICS_LOGGER = "applog"
DEFAULT_DIAGNOSTICS_LEVEL = logging.WARNING

# stdlib level names accepted for LOG_DIAGNOSTICS_LEVEL
_DIAGNOSTICS_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def diagnostics_level(value: Optional[str]) -> int:
    """Resolve a stdlib level name, case-insensitively; unknown → WARNING."""
    return _DIAGNOSTICS_LEVELS.get((value or "").upper(), DEFAULT_DIAGNOSTICS_LEVEL)


def _handler(logger: logging.Logger) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if getattr(handler, "_applog_diagnostics", False):
            return handler
    return None


def setup_logging(log_level: Optional[str] = "WARNING", stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach the JSON diagnostics handler to the 'applog' logger.

    Safe to call repeatedly: the handler is installed once, and later calls
    only adjust the level.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Anything else
            means WARNING.
        stream: Destination for diagnostic lines (default: stderr).

    Returns:
        The configured 'applog' logger.
    """
    logger = logging.getLogger(DIAGNOSTICS_LOGGER)
    logger.setLevel(diagnostics_level(log_level))

    if _handler(logger) is not None:
        return logger

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler._applog_diagnostics = True  # type: ignore[attr-defined]
    handler.setFormatter(
        JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={
                "asctime": "timestamp",
                "levelname": "level",
                "name": "logger",
            },
            static_fields={"channel": "diagnostics"},
            datefmt="%Y-%m-%dT%H:%M:%SZ",
        )
    )
    logger.addHandler(handler)
    return logger
