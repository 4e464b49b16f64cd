"""
Logger setup — builds a Logger from LogSettings.

setup_logger(name, build)  → fresh Logger, level from LOG_LEVEL, sink chosen
                             by LOG_REMOTE_URL, build id as a pending field
get_logger()               → process-wide default, built on first access

The build field is a pending field like any other: the first record the
returned logger emits (or gates) consumes it.
"""

from __future__ import annotations

import logging
from typing import Optional

from applog.config import LogSettings, get_settings
from applog.logger import Data, Logger
from applog.logging_config import setup_logging
from applog.sinks import RemoteSink, Sink, StdoutSink

logger = logging.getLogger("applog")

# ── Module-level singleton (initialized on first access) ──
_default_logger: Optional[Logger] = None


def build_sink(settings: LogSettings) -> Sink:
    """RemoteSink when LOG_REMOTE_URL is set, StdoutSink otherwise."""
    if settings.log_remote_url:
        logger.info(
            "Remote sink enabled",
            extra={"step": "setup", "url": settings.log_remote_url},
        )
        return RemoteSink(settings.log_remote_url, timeout=settings.log_remote_timeout)
    return StdoutSink()


def _build_root(name: str, settings: LogSettings) -> Logger:
    setup_logging(settings.log_diagnostics_level)
    return Logger(
        name,
        settings.resolved_level(),
        build_sink(settings),
        strict=settings.log_strict,
    )


def setup_logger(name: str, build: str, settings: Optional[LogSettings] = None) -> Logger:
    """Standard logger setup for a service.

    Args:
        name: Application / service name for the ``app`` field.
        build: Build or version identifier attached as the ``build`` field.
        settings: Explicit settings; read from the environment when omitted.
    """
    root = _build_root(name, settings or get_settings())
    return root.with_fields(Data({"build": build}))


def get_logger(name: str = "app") -> Logger:
    """Return the process-wide default logger.

    On first call, builds one from the environment under ``name``.
    Subsequent calls return the cached instance whatever ``name`` says.
    """
    global _default_logger
    if _default_logger is None:
        _default_logger = _build_root(name, get_settings())
    return _default_logger


def reset_logger() -> None:
    """Drop the default logger. For testing only; forces re-initialization."""
    global _default_logger
    _default_logger = None


def override_logger(instance: Logger) -> None:
    """Replace the default logger. For testing only."""
    global _default_logger
    _default_logger = instance
