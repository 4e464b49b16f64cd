"""
Shared test fixtures for the applog test suite.

Provides an in-memory sink and a clean logging environment for every test.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Generator

import pytest

from applog.bootstrap import reset_logger
from applog.levels import Level
from applog.logger import Logger
from applog.logging_config import DIAGNOSTICS_LOGGER


class MemorySink:
    """Sink that keeps every payload it receives."""

    def __init__(self) -> None:
        self.payloads: list[bytes] = []
        self._lock = threading.Lock()

    def write(self, payload: bytes) -> int:
        with self._lock:
            self.payloads.append(bytes(payload))
        return len(payload)

    @property
    def records(self) -> list[dict[str, Any]]:
        return [json.loads(p) for p in self.payloads]


class BrokenSink:
    """Sink whose every write fails."""

    def __init__(self) -> None:
        self.calls = 0

    def write(self, payload: bytes) -> int:
        self.calls += 1
        raise OSError("disk on fire")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Clear LOG_* variables and the default logger; run from an empty directory."""
    for name in (
        "LOG_LEVEL",
        "LOG_REMOTE_URL",
        "LOG_REMOTE_TIMEOUT",
        "LOG_STRICT",
        "LOG_DIAGNOSTICS_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    # no stray .env file from the working directory
    monkeypatch.chdir(tmp_path)
    reset_logger()

    # setup_logging() binds to the current stderr; start each test without handlers
    diag = logging.getLogger(DIAGNOSTICS_LOGGER)
    saved_handlers, saved_level = list(diag.handlers), diag.level
    diag.handlers = []
    yield
    diag.handlers = saved_handlers
    diag.setLevel(saved_level)
    reset_logger()


@pytest.fixture()
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture()
def broken_sink() -> BrokenSink:
    return BrokenSink()


@pytest.fixture()
def info_logger(sink: MemorySink) -> Logger:
    """Logger thresholded at INFO writing to the memory sink."""
    return Logger("test-app", Level.INFO, sink)
