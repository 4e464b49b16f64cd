"""
FastAPI / Starlette access logging in the applog record format.

Usage:
    log = setup_logger("billing", build)
    app = FastAPI()
    app.middleware("http")(for_fastapi(log))

Every request writes one JSON line to the logger's sink, shaped like a
regular record so downstream consumers parse both the same way:

    {"time": ..., "app": ..., "level": "info", "msg": "<METHOD>",
     "data": {"remote": ..., "uri": ..., "status": <int>, "latency": ...},
     "src": {"file": ..., "line": ...}}

Known limitation: src is captured once, where for_fastapi() is called, so
every access line reports that same file/line.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from string import Template
from typing import Awaitable, Callable

from starlette.requests import Request
from starlette.responses import Response

from applog.logger import Logger
from applog.models import Src
from applog.source import capture_call_site

diagnostics = logging.getLogger("applog")

CallNext = Callable[[Request], Awaitable[Response]]
AccessLogMiddleware = Callable[[Request, CallNext], Awaitable[Response]]

# ${...} placeholders are filled per request; %s/%d once at construction.
ACCESS_LOG_FORMAT = (
    '{"time":"${time_rfc3339}","app":"%s","level":"info","msg":"${method}",'
    '"data":{"remote":"${remote_ip}","uri":"${uri}","status":${status},'
    '"latency":"${latency_human}"},"src":{"file":"%s","line":%d}}'
)


def _escape(value: str) -> str:
    """JSON string-body escaping (no surrounding quotes)."""
    return json.dumps(value, ensure_ascii=False)[1:-1]


def build_access_format(app_name: str, src: Src) -> str:
    """Fill the construction-time literals of ACCESS_LOG_FORMAT.

    Literal ``$`` is doubled so the result stays a valid Template.
    """
    return ACCESS_LOG_FORMAT % (
        _escape(app_name).replace("$", "$$"),
        _escape(src.file).replace("$", "$$"),
        src.line,
    )


def human_latency(seconds: float) -> str:
    """Human-readable duration: µs below a millisecond, ms below a second, s above."""
    if seconds < 1e-3:
        return f"{seconds * 1e6:.3f}µs"
    if seconds < 1:
        return f"{seconds * 1e3:.6f}ms"
    return f"{seconds:.6f}s"


def remote_ip(request: Request) -> str:
    """Client address, honouring X-Forwarded-For (first hop) and X-Real-IP."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else ""


def request_uri(request: Request) -> str:
    """Path plus query string, as sent by the client."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def for_fastapi(logger: Logger) -> AccessLogMiddleware:
    """Build an ``http`` middleware that writes access lines to ``logger.out``.

    The call site of this function is captured here, once, and written into
    every access line.
    """
    template = Template(build_access_format(logger.app_name, capture_call_site(1)))
    out = logger.out

    def write(request: Request, status: int, started: float) -> None:
        line = template.substitute(
            time_rfc3339=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            method=_escape(request.method),
            remote_ip=_escape(remote_ip(request)),
            uri=_escape(request_uri(request)),
            status=status,
            latency_human=_escape(human_latency(time.perf_counter() - started)),
        )
        try:
            out.write(line.encode("utf-8"))
        except Exception as exc:
            diagnostics.warning(
                "Access log write failed",
                extra={"step": "access_log", "error": str(exc)},
            )

    async def access_log(request: Request, call_next: CallNext) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            write(request, 500, started)
            raise
        write(request, response.status_code, started)
        return response

    return access_log
