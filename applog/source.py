"""
Call-site capture and path truncation for the ``Src`` block of a record.

Paths are truncated to "immediate parent directory + filename" so records
never leak the full build or install path.
"""

from __future__ import annotations

import os
import re
import sys

from applog.models import Src

_SEPARATORS = re.compile(
    "[" + re.escape(os.sep) + (re.escape(os.altsep) if os.altsep else "") + "]"
)


def truncate_file(path: str) -> str:
    """Return ``<last dir>/<file>``, or the bare filename without a parent.

    "project/src/model/user.py" → "model/user.py"
    "main.py"                   → "main.py"
    ""                          → ""
    """
    directory, filename = os.path.split(path)
    parts = [part for part in _SEPARATORS.split(directory) if part]
    if parts:
        return os.path.join(parts[-1], filename)
    return filename


def capture_call_site(depth: int = 1) -> Src:
    """Capture the source location ``depth`` frames above the caller.

    ``depth=0`` is the function that calls capture_call_site, ``1`` is its
    caller, and so on. A stack that is too shallow yields ``???:0``.
    """
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return Src(file="???", line=0)
    return Src(file=truncate_file(frame.f_code.co_filename), line=frame.f_lineno)
