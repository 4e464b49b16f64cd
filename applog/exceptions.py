"""
Exception classes raised by applog.

In the default (fail-open) mode none of these ever reach the caller of a
logging method: the logger catches them, reports them to the diagnostics
channel and carries on. They surface only when a logger or lookup runs in
strict mode (``LOG_STRICT=true``).

    UnknownLevelError   → to_level() got a label outside the table
    SerializationError  → a record could not be rendered as JSON
    SinkWriteError      → the sink refused the serialized record
"""


class AppLogError(Exception):
    """Base class for every error raised by applog."""

    def __init__(self, message: str = "applog error") -> None:
        self.message = message
        super().__init__(self.message)


class UnknownLevelError(AppLogError):
    """Raised by ``to_level(..., strict=True)`` for an unrecognized label."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown log level: {value!r}")


class SerializationError(AppLogError):
    """Raised when a log record cannot be marshaled to JSON.

    Causes:
        - A value in the ``data`` map that JSON cannot represent
          (arbitrary objects, sockets, locks, ...)
    """

    def __init__(self, message: str = "Unable to marshal log record") -> None:
        super().__init__(message)


class SinkWriteError(AppLogError):
    """Raised in strict mode when the sink fails to accept a record."""

    def __init__(self, message: str = "Sink write failed") -> None:
        super().__init__(message)
