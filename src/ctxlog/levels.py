"""
Severity levels for the logging facade.

Five levels, ordered from most to least verbose. The emit rule is:

    message.level >= threshold  →  message is dispatched

    ←── louder ──────────────────────────── quieter ──→
     0         1        2       3          4
     VERBOSE   DEBUG    INFO    WARNING    ERROR

Level names are the canonical uppercase words; they appear in every
formatted line (``INFO|Origin|message``) and in configuration files.
"""

from enum import IntEnum
from typing import Any


class LogLevel(IntEnum):
    """Closed set of severity levels. Ordinal order is fixed."""
    VERBOSE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4


LEVEL_NAMES = {
    LogLevel.VERBOSE: 'VERBOSE',
    LogLevel.DEBUG:   'DEBUG',
    LogLevel.INFO:    'INFO',
    LogLevel.WARNING: 'WARNING',
    LogLevel.ERROR:   'ERROR',
}

# Stored preference integer → level. Anything else maps to VERBOSE.
PREFERENCE_LEVELS = {
    1: LogLevel.DEBUG,
    2: LogLevel.INFO,
    3: LogLevel.WARNING,
    4: LogLevel.ERROR,
}


def ordinal(level: LogLevel) -> int:
    """Return the ordinal value of a level."""
    return int(level)


def level_name(level: Any) -> str:
    """Return the canonical name for a level.

    Values outside the closed set produce a placeholder such as
    ``<unknown level 9>`` rather than raising.
    """
    try:
        return LEVEL_NAMES[LogLevel(level)]
    except (ValueError, TypeError):
        return f"<unknown level {level}>"


def parse_level(name: Any) -> LogLevel:
    """Parse a level name, case-insensitively.

    Unrecognized input (including None) yields ERROR, the most
    restrictive level: a bad config under-logs instead of failing.
    """
    if isinstance(name, str):
        wanted = name.strip().upper()
        for level, canonical in LEVEL_NAMES.items():
            if canonical == wanted:
                return level
    return LogLevel.ERROR


def level_from_preference(raw: Any) -> LogLevel:
    """Map a stored preference integer (0-4) to a level.

    1-4 select DEBUG through ERROR. Everything else, including 0,
    missing and non-integer values, selects VERBOSE.
    """
    if isinstance(raw, bool):
        return LogLevel.VERBOSE
    try:
        return PREFERENCE_LEVELS.get(int(raw), LogLevel.VERBOSE)
    except (TypeError, ValueError):
        return LogLevel.VERBOSE


def default_threshold(debug: bool = False) -> LogLevel:
    """Starting threshold: everything in debug deployments, INFO otherwise."""
    return LogLevel.VERBOSE if debug else LogLevel.INFO


def shift_level(level: LogLevel, steps: int) -> LogLevel:
    """Move a threshold by ``steps`` (negative = more verbose), clamped."""
    value = max(LogLevel.VERBOSE, min(LogLevel.ERROR, int(level) + steps))
    return LogLevel(value)
