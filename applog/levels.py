"""
Log severity levels, ordered from least to most severe.

The ordering is total and fixed:

    DEBUG < INFO < NOTICE < WARNING < ERROR < CRITICAL < ALERT < EMERGENCY

Labels are the lowercase names used on the wire (``"level"`` field of every
record). Unrecognized labels resolve to DEFAULT_LEVEL rather than failing,
unless the caller asks for strict lookup.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional

from applog.exceptions import UnknownLevelError


class Level(IntEnum):
    """Ordered log severity (syslog-style, without the numeric inversion)."""

    DEBUG = 0
    INFO = 1
    NOTICE = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5
    ALERT = 6
    EMERGENCY = 7

    @property
    def label(self) -> str:
        return LEVEL_LABELS[self]

    def __str__(self) -> str:
        return self.label


DEFAULT_LEVEL: Level = Level.NOTICE

# ── Label table ──────────────────────────────────────────────
# Single source of truth for both directions of the mapping.
LEVEL_LABELS: dict[Level, str] = {
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.NOTICE: "notice",
    Level.WARNING: "warning",
    Level.ERROR: "error",
    Level.CRITICAL: "critical",
    Level.ALERT: "alert",
    Level.EMERGENCY: "emergency",
}

LEVEL_VALUES: dict[str, Level] = {label: level for level, label in LEVEL_LABELS.items()}


def to_level(
    value: Optional[str],
    default: Level = DEFAULT_LEVEL,
    *,
    strict: bool = False,
) -> Level:
    """Resolve a level label, case-insensitively.

    Args:
        value: Label such as ``"warning"`` or ``"DEBUG"``. ``None`` counts
            as unrecognized (an unset environment variable).
        default: Level returned for unrecognized labels.
        strict: Raise instead of falling back to ``default``.

    Returns:
        The matching Level, or ``default``.

    Raises:
        UnknownLevelError: If ``strict`` is set and the label is unknown.
    """
    level = LEVEL_VALUES.get((value or "").lower())
    if level is None:
        if strict:
            raise UnknownLevelError(value)
        return default
    return level
