"""
Log sinks — destinations that accept one fully-serialized record at a time.

Protocol:
    Sink         — write(payload: bytes) -> int, raises on failure

Implementations:
    StdoutSink   — record + newline on standard output
    RemoteSink   — StdoutSink behaviour plus a detached, best-effort HTTP
                   POST of the same bytes to a configured URL

The logger core treats every sink as fire-and-forget: whatever a sink
raises is reported to the diagnostics channel and discarded.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Optional, Protocol, TextIO, runtime_checkable

import requests

logger = logging.getLogger("applog")

# Timeout for the outbound POST (connect and read each), in seconds.
REMOTE_TIMEOUT: float = 3.0


# ═══════════════════════════════════════════════════════════
#  Sink Protocol
# ═══════════════════════════════════════════════════════════


@runtime_checkable
class Sink(Protocol):
    """Anything that accepts a serialized record.

    Implementations:
        - StdoutSink  — local standard output
        - RemoteSink  — standard output + HTTP POST copy
    """

    def write(self, payload: bytes) -> int:
        """Write one record.

        Args:
            payload: A single serialized record, without trailing newline.

        Returns:
            Number of bytes written locally.

        Raises:
            OSError: (or any other exception) if the local write failed.
        """
        ...


# ═══════════════════════════════════════════════════════════
#  Standard output
# ═══════════════════════════════════════════════════════════


class StdoutSink:
    """Write each record followed by a newline.

    The stream defaults to whatever ``sys.stdout`` is at write time, so
    redirected or captured stdout is honoured.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, payload: bytes) -> int:
        line = payload.decode("utf-8", errors="replace") + "\n"
        stream = self.stream
        stream.write(line)
        stream.flush()
        return len(payload) + 1


# ═══════════════════════════════════════════════════════════
#  Remote POST
# ═══════════════════════════════════════════════════════════


class RemoteSink(StdoutSink):
    """Standard output plus a detached HTTP POST of every record.

    Delivery is best-effort: no retry, no queue, no back-pressure. A failed
    or slow POST never blocks or fails the logging call; problems are
    reported to the 'applog' diagnostics logger only.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = REMOTE_TIMEOUT,
        stream: Optional[TextIO] = None,
    ) -> None:
        super().__init__(stream)
        self.url = url
        self.timeout = timeout
        self._session = requests.Session()

    def write(self, payload: bytes) -> int:
        if self.url:
            threading.Thread(
                target=self.post,
                args=(bytes(payload),),
                name="applog-remote-sink",
                daemon=True,
            ).start()
        return super().write(payload)

    def post(self, payload: bytes) -> Optional[requests.Response]:
        """Deliver one record to the remote endpoint (blocking).

        Runs on the detached thread started by write(). Never raises.

        Returns:
            The response, or None if the request failed.
        """
        try:
            response = self._session.post(
                self.url,
                data=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning(
                "Remote sink POST failed: %s",
                exc,
                extra={"step": "remote_sink", "url": self.url, "error": str(exc)},
            )
            return None

        with response:
            if response.status_code >= 300:
                logger.warning(
                    "Remote sink rejected record: %s %s",
                    response.status_code,
                    response.reason,
                    extra={
                        "step": "remote_sink",
                        "url": self.url,
                        "status": response.status_code,
                        "reason": response.reason,
                    },
                )
        return response
