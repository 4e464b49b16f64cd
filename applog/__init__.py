"""
applog — leveled JSON logging with structured fields.

Public API:
    from applog import (
        Logger, Data, Loggable, Level, to_level,
        StdoutSink, RemoteSink, setup_logger, get_logger,
    )
"""

from applog.bootstrap import get_logger, override_logger, reset_logger, setup_logger
from applog.config import LogSettings, get_settings
from applog.exceptions import (
    AppLogError,
    SerializationError,
    SinkWriteError,
    UnknownLevelError,
)
from applog.levels import DEFAULT_LEVEL, Level, to_level
from applog.logger import Data, Loggable, Logger
from applog.models import Src, WriteLog
from applog.sinks import RemoteSink, Sink, StdoutSink
from applog.source import capture_call_site, truncate_file

__version__ = "0.1.0"

__all__ = [
    # Core
    "Logger",
    "Data",
    "Loggable",
    # Levels
    "Level",
    "DEFAULT_LEVEL",
    "to_level",
    # Records
    "WriteLog",
    "Src",
    "capture_call_site",
    "truncate_file",
    # Sinks
    "Sink",
    "StdoutSink",
    "RemoteSink",
    # Setup
    "LogSettings",
    "get_settings",
    "setup_logger",
    "get_logger",
    "override_logger",
    "reset_logger",
    # Errors
    "AppLogError",
    "UnknownLevelError",
    "SerializationError",
    "SinkWriteError",
]
