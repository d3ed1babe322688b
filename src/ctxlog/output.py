"""Console message helpers for the ctxlog command line.

User-facing print_*() output for commands. Status lines respect the
threshold chosen with -v/-Q: they behave like WARNING-level messages
and disappear once the threshold is raised to ERROR. Errors go through
the LogFacade so they land in the log file too.
"""

import sys

from ctxlog.levels import LogLevel
from ctxlog.manager import get_logging


def _should_print():
    """Status lines show unless the threshold is ERROR."""
    return get_logging().current_threshold() < LogLevel.ERROR


def print_ok(msg):
    """Print a success message."""
    if _should_print():
        print(f"  [OK] {msg}")


def print_warn(msg):
    """Print a warning message."""
    if _should_print():
        print(f"  [WARN] {msg}")


def print_error(msg):
    """Log an error message at ERROR.

    The console sink writes it to stderr; a plain stderr print is the
    fallback when the facade cannot be built.
    """
    try:
        get_logging().error(msg, origin='cli')
    except Exception:
        print(f"  ERROR: {msg}", file=sys.stderr)
