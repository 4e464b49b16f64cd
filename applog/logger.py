"""
Leveled JSON logger: the core of applog.

Usage:
    log = Logger("billing", Level.INFO)
    log.info("started on port %d", 8080)

    req = log.with_fields(Data({"request_id": rid}))
    req.warn("slow upstream")            # carries request_id
    req.info("done")                     # request_id already consumed

Field lifecycle:
    Fields attached with with_fields() sit in the returned logger's pending
    buffer and are consumed by the NEXT logging call on that logger, at any
    level. The buffer is cleared whether the call was emitted or gated by
    the level threshold.

Concurrency:
    Each Logger owns its buffer and the lock guarding it. The lock is held
    only while the buffer is snapshotted and reset, never across JSON
    serialization or the sink write.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

from applog.exceptions import SerializationError, SinkWriteError
from applog.levels import Level
from applog.models import WriteLog
from applog.sinks import Sink, StdoutSink
from applog.source import capture_call_site

diagnostics = logging.getLogger("applog")

# Frames between _output() and the code that called a severity method:
# _output ← info()/warn()/... ← caller
_CALL_DEPTH = 2


@runtime_checkable
class Loggable(Protocol):
    """Anything that can contribute structured fields to a record."""

    def log(self) -> Mapping[str, Any]: ...


class Data(dict):
    """Plain key → value fields; the stock Loggable."""

    def log(self) -> Mapping[str, Any]:
        return self


FieldSource = Union[Loggable, Mapping[str, Any]]


def _sprintf(msg: Any, args: tuple[Any, ...], strict: bool) -> str:
    if not isinstance(msg, str):
        msg = str(msg)
    if not args:
        return msg
    try:
        return msg % args
    except (TypeError, ValueError, KeyError):
        if strict:
            raise
        return f"{msg} {args!r}"


def _items(source: FieldSource) -> Mapping[str, Any]:
    if isinstance(source, Loggable):
        return source.log()
    return source


class Logger:
    """Structured logger bound to one application name and level threshold.

    Args:
        app: Application / service name written to every record.
        level: Minimum level that is written; lower levels are gated.
        sink: Destination for serialized records (default: StdoutSink).
        strict: Propagate formatting, serialization and sink errors
            instead of the default fail-open behaviour.
    """

    def __init__(
        self,
        app: str,
        level: Level,
        sink: Optional[Sink] = None,
        *,
        strict: bool = False,
    ) -> None:
        self._app = app
        self._level = Level(level)
        self._out: Sink = sink if sink is not None else StdoutSink()
        self._strict = strict
        self._data: dict[str, Any] = {}
        self._mutex = threading.Lock()

    def __repr__(self) -> str:
        return f"Logger(app={self._app!r}, level={self._level.label!r})"

    # ── Accessors ─────────────────────────────────────────

    @property
    def app_name(self) -> str:
        return self._app

    @property
    def level(self) -> Level:
        return self._level

    @property
    def out(self) -> Sink:
        return self._out

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def fields(self) -> dict[str, Any]:
        """Copy of the pending fields that the next call will consume."""
        with self._mutex:
            return dict(self._data)

    # ── Structured context ────────────────────────────────

    def with_fields(self, *items: FieldSource) -> Logger:
        """Return a new logger carrying the pending fields plus ``items``.

        A key seen more than once collects its values in order:
            log.with_fields(Data(k="v1"))                      → {"k": "v1"}
            log.with_fields(Data(k="v1")).with_fields(Data(k="v2"))
                                                               → {"k": ["v1", "v2"]}

        The receiver is left untouched; the returned logger shares its
        name, level, sink and strictness.
        """
        merged = self.fields

        for item in items:
            for key, value in _items(item).items():
                if key not in merged:
                    merged[key] = value
                    continue

                current = merged[key]
                if isinstance(current, list):
                    # copy so a list shared with the parent logger is never mutated
                    merged[key] = [*current, value]
                else:
                    merged[key] = [current, value]

        child = Logger(self._app, self._level, self._out, strict=self._strict)
        child._data = merged
        return child

    # ── Severity methods ──────────────────────────────────

    def debug(self, msg: str, *args: Any) -> None:
        """Detailed debug information."""
        self._output(_CALL_DEPTH, Level.DEBUG, _sprintf(msg, args, self._strict))

    def info(self, msg: str, *args: Any) -> None:
        """Interesting events. Examples: user logs in, SQL logs."""
        self._output(_CALL_DEPTH, Level.INFO, _sprintf(msg, args, self._strict))

    def notice(self, msg: str, *args: Any) -> None:
        """Normal but significant events."""
        self._output(_CALL_DEPTH, Level.NOTICE, _sprintf(msg, args, self._strict))

    def warn(self, msg: str, *args: Any) -> None:
        """Exceptional occurrences that are not errors.

        Examples: use of deprecated APIs, poor use of an API, undesirable
        things that are not necessarily wrong.
        """
        self._output(_CALL_DEPTH, Level.WARNING, _sprintf(msg, args, self._strict))

    warning = warn

    def error(self, msg: str, *args: Any) -> None:
        """Runtime errors that do not require immediate action but should be monitored."""
        self._output(_CALL_DEPTH, Level.ERROR, _sprintf(msg, args, self._strict))

    def critical(self, msg: str, *args: Any) -> None:
        """Critical conditions. Example: service unavailable, unexpected exception."""
        self._output(_CALL_DEPTH, Level.CRITICAL, _sprintf(msg, args, self._strict))

    def alert(self, msg: str, *args: Any) -> None:
        """Action must be taken immediately. Example: website down, database unavailable.

        This should wake someone up.
        """
        self._output(_CALL_DEPTH, Level.ALERT, _sprintf(msg, args, self._strict))

    def emergency(self, msg: str, *args: Any) -> None:
        """The system is unusable."""
        self._output(_CALL_DEPTH, Level.EMERGENCY, _sprintf(msg, args, self._strict))

    def fatal(self, msg: str, *args: Any) -> None:
        """Write an emergency record, then terminate the process with status 1.

        Termination is unconditional: it happens even when formatting,
        serialization or the sink write failed.
        """
        try:
            self._output(_CALL_DEPTH, Level.EMERGENCY, _sprintf(msg, args, self._strict))
        finally:
            try:
                sys.stdout.flush()
            finally:
                os._exit(1)

    # ── Emission ──────────────────────────────────────────

    def _output(self, call_depth: int, level: Level, msg: str) -> None:
        """Gate, assemble, serialize and write one record.

        ``call_depth`` counts frames from here to the code whose location
        should be reported.
        """
        if level < self._level:
            with self._mutex:
                self._data = {}
            return

        now = datetime.now(timezone.utc)
        src = capture_call_site(call_depth)

        with self._mutex:
            app = self._app
            data = dict(self._data)
            self._data = {}

        try:
            record = WriteLog.assemble(
                time=now, app=app, level=level.label, msg=msg, data=data, src=src
            )
            payload = record.to_json()
        except SerializationError as exc:
            if self._strict:
                raise
            payload = f"Logger unable to marshal log output to JSON: {exc}".encode("utf-8")

        try:
            self._out.write(payload)
        except Exception as exc:
            if self._strict:
                raise SinkWriteError(str(exc)) from exc
            diagnostics.debug(
                "Sink write failed; record discarded",
                extra={"step": "sink_write", "app": app, "error": str(exc)},
            )
