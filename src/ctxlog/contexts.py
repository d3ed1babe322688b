"""
Named log contexts.

A context is an opaque small integer identifying the subsystem that
emitted a message ("networking", "auth", ...). The filtering engine only
ever compares contexts by equality; names exist for humans, config files
and the command line.

The registry is a global dictionary populated by application modules at
import time via register_context()/register_contexts(), the same way
they would register any other process-wide table.

Context spec syntax (CLI and config):
    auth        # registered name
    7           # raw integer, registered or not
"""

from typing import Dict, Optional, Tuple, Union


# Contexts used by ctxlog itself
GENERAL = 0
TRACE = 1
ASSERTION = 2

_CONTEXTS: Dict[str, int] = {
    'general':   GENERAL,
    'trace':     TRACE,
    'assertion': ASSERTION,
}

CONTEXT_DESCRIPTIONS: Dict[str, str] = {
    'general':   'General output',
    'trace':     'Function call tracing (@trace)',
    'assertion': 'Reserved for assertion tooling (failure lines are never filtered)',
}


def register_context(name: str, value: int, description: str = '') -> int:
    """Register a named context and return its value.

    Re-registering a name overwrites it silently (allows reloading
    during development).
    """
    _CONTEXTS[name] = value
    CONTEXT_DESCRIPTIONS[name] = description
    return value


def register_contexts(*entries: Tuple[str, int, str]) -> None:
    """Register several (name, value, description) tuples at once."""
    for name, value, description in entries:
        register_context(name, value, description)


def get_context(name: str) -> Optional[int]:
    """Look up a context by name. Returns None if not registered."""
    return _CONTEXTS.get(name)


def context_name(value: int) -> str:
    """Return the registered name for a context value, or the number itself."""
    for name, registered in _CONTEXTS.items():
        if registered == value:
            return name
    return str(value)


def known_contexts() -> Dict[str, int]:
    """Copy of the name → value registry."""
    return dict(_CONTEXTS)


def parse_context_spec(spec: Union[str, int]) -> int:
    """Resolve a context spec (name or integer) to its value.

    Raises:
        ValueError: if the spec is neither a registered name nor an integer.
    """
    if isinstance(spec, int) and not isinstance(spec, bool):
        return spec
    text = str(spec).strip()
    value = _CONTEXTS.get(text)
    if value is not None:
        return value
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"Unknown log context: {spec!r}") from None


def format_context_list() -> str:
    """Format the registered contexts for display.

    Returns:
        Formatted string listing all contexts with values and descriptions.
    """
    lines = ["Available contexts:"]
    max_name = max(len(name) for name in _CONTEXTS)
    for name, value in sorted(_CONTEXTS.items(), key=lambda item: item[1]):
        desc = CONTEXT_DESCRIPTIONS.get(name, '')
        lines.append(f"  {name:<{max_name}}  {value:>3}  {desc}".rstrip())
    return "\n".join(lines)
