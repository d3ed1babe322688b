"""
Function tracing decorator.

Routes entry/exit lines through the LogFacade singleton at VERBOSE on
the 'trace' context, so tracing obeys the same threshold and the same
console black-list/white-list as everything else.
"""

import functools
import inspect
from pathlib import Path

from .contexts import TRACE
from .levels import LogLevel


def _short_repr(value):
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def trace(func):
    """Decorator to trace function calls via the LogFacade.

    Shows entry with arguments, exit with the return value (if not None)
    and any exception raised, when the threshold is VERBOSE.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Lazy import to avoid circular dependency
        from .manager import get_logging

        log = get_logging()
        if log.current_threshold() > LogLevel.VERBOSE:
            return func(*args, **kwargs)

        module = inspect.getmodule(func)
        module_name = module.__name__ if module else "unknown"
        func_name = func.__name__

        args_repr = []
        remaining_args = args
        # Methods: show the bound instance as 'self'
        owner = func.__qualname__.split('.')[-2:-1]
        if args and owner and owner[0] != '<locals>':
            args_repr.append('self')
            remaining_args = args[1:]
        args_repr.extend(_short_repr(arg) for arg in remaining_args)
        args_repr.extend(f"{key}={_short_repr(value)}" for key, value in kwargs.items())
        args_str = ', '.join(args_repr)

        log.verbose(">> {fn}({args})", origin=module_name, context=TRACE,
                    fn=func_name, args=args_str)
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            log.verbose("!! {fn} raised: {exc}: {msg}", origin=module_name,
                        context=TRACE, fn=func_name,
                        exc=type(e).__name__, msg=str(e))
            raise

        if result is not None:
            log.verbose("<< {fn} returned: {val}", origin=module_name,
                        context=TRACE, fn=func_name, val=_short_repr(result))
        return result

    return wrapper
