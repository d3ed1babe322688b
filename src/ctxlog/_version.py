"""Version information for ctxlog.

Bump MAJOR/MINOR/PATCH/PHASE here; everything else is derived.
setup.py carries the matching PEP 440 string.
"""

MAJOR = 0
MINOR = 1
PATCH = 0
PHASE = "alpha"  # None, "alpha", "beta" or "rcN"

__app_name__ = "ctxlog"

_PEP440_PHASES = {"alpha": "a0", "beta": "b0"}


def get_version():
    """Return the display version, e.g. '0.1.0-alpha'."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    return f"{base}-{PHASE}" if PHASE else base


def get_pip_version():
    """Return the PEP 440 version, e.g. '0.1.0a0'."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base += _PEP440_PHASES.get(PHASE, PHASE)
    return base


__version__ = get_version()
PIP_VERSION = get_pip_version()
