"""ctxlog: leveled, context-filtered logging facade.

Application code logs through one LogFacade; a global severity threshold
gates every sink and a runtime-mutable black-list/white-list of contexts
decides what reaches the console.

Public API:
    LogFacade, BoundLogger, LoggingState: the facade and its state
    init_logging, get_logging           : process singleton
    LogLevel, level_name, parse_level   : severity levels
    ContextFilter, FilterMode           : context filtering
    AssertionRecorder, RecordPolicy, AbortPolicy: assertion handling
    ConsoleSink, FileSink, StdlibSink   : sinks
    register_context, parse_context_spec: named contexts
    trace                               : function tracing decorator
"""

from ctxlog._version import __version__, __app_name__
from ctxlog.assertions import (
    AbortPolicy, AssertionOutcome, AssertionRecorder, RecordPolicy,
)
from ctxlog.contexts import (
    get_context, context_name, parse_context_spec,
    register_context, register_contexts, format_context_list,
)
from ctxlog.filters import ContextFilter, FilterDecision, FilterMode, FilterState
from ctxlog.levels import (
    LogLevel, level_from_preference, level_name, ordinal, parse_level,
)
from ctxlog.manager import (
    BoundLogger, LogFacade, LoggingState, build_facade, get_logging, init_logging,
)
from ctxlog.sinks import ConsoleSink, FileSink, StdlibSink, TimestampFormatter
from ctxlog.trace import trace

__all__ = [
    "__version__", "__app_name__",
    "LogFacade", "BoundLogger", "LoggingState",
    "build_facade", "init_logging", "get_logging",
    "LogLevel", "level_name", "parse_level", "ordinal", "level_from_preference",
    "ContextFilter", "FilterDecision", "FilterMode", "FilterState",
    "AssertionRecorder", "AssertionOutcome", "RecordPolicy", "AbortPolicy",
    "ConsoleSink", "FileSink", "StdlibSink", "TimestampFormatter",
    "register_context", "register_contexts", "get_context", "context_name",
    "parse_context_spec", "format_context_list",
    "trace",
]
