"""
LogFacade: the single entry point for leveled, context-tagged logging.

Every call goes through one decision path:

    level < threshold            →  dropped, nothing formatted
    context given, filter DROP   →  skipped on filtered sinks (console)
    otherwise                    →  "LEVEL|Origin|Message" to each sink

The process-wide mutable state (threshold, context filter, assertion
flags, persistence flag) lives in one LoggingState owned by the facade.
init_logging() builds the process facade once at startup; get_logging()
returns it, creating a default console-only facade on first use.

Usage::

    log = init_logging(load_logging_config())
    log.info("Loaded {count} items", origin="Catalog", count=42)
    log.filter.add_to_blacklist(NETWORKING)
    log.debug("socket opened", origin="Transport", context=NETWORKING)

    session_log = log.for_origin("Session")
    session_log.warning("token expires in {secs}s", secs=30)
"""

import sys
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Hashable, Iterable, Optional

from .assertions import AbortPolicy, AssertionOutcome, AssertionRecorder
from .contexts import parse_context_spec
from .filters import ContextFilter, FilterDecision, FilterMode
from .levels import (
    LogLevel, default_threshold, level_from_preference, level_name,
)
from .sinks import ConsoleSink, FileSink, StdlibSink

DEFAULT_ORIGIN = '-'


@dataclass
class LoggingState:
    """All mutable logging state for one process."""
    threshold: LogLevel
    filter: ContextFilter = field(default_factory=ContextFilter)
    assertions: Optional[AssertionRecorder] = None
    persist_to_file: bool = False
    debug: bool = False


class LogFacade:
    """Threshold + context filter in front of a fixed set of sinks.

    Args:
        sinks: Sinks attached from the start (console, stdlib, ...).
        file_sink: Sink used when persistence is switched on. Created
            under ``~/.ctxlog/logs`` on first use when omitted.
        threshold: Starting threshold; VERBOSE in debug deployments,
            INFO otherwise.
        debug: Interactive debug deployment. Only affects the default
            threshold and whether assertion failures may abort.
        assertion_policy: RecordPolicy or AbortPolicy; AbortPolicy(debug)
            when omitted.
        context_filter: Filter shared with other components, if any.
    """

    def __init__(
        self,
        sinks: Iterable = None,
        file_sink: Optional[FileSink] = None,
        threshold: Optional[LogLevel] = None,
        debug: bool = False,
        assertion_policy=None,
        context_filter: Optional[ContextFilter] = None,
    ):
        if threshold is None:
            threshold = default_threshold(debug)
        if assertion_policy is None:
            assertion_policy = AbortPolicy(debug=debug)
        self.state = LoggingState(
            threshold=LogLevel(threshold),
            filter=context_filter if context_filter is not None else ContextFilter(),
            assertions=AssertionRecorder(policy=assertion_policy,
                                         emit=self._assertion_line),
            debug=debug,
        )
        self._sinks = tuple(sinks) if sinks is not None else (ConsoleSink(),)
        self._file_sink = file_sink
        self._persist_lock = threading.RLock()

    # -- state accessors ------------------------------------------------------

    @property
    def filter(self) -> ContextFilter:
        return self.state.filter

    @property
    def assertions(self) -> AssertionRecorder:
        return self.state.assertions

    @property
    def sinks(self) -> tuple:
        return self._sinks

    def current_threshold(self) -> LogLevel:
        return self.state.threshold

    def set_threshold(self, level: LogLevel) -> None:
        self.state.threshold = LogLevel(level)

    def apply_level_from_preference(self, raw: Any) -> LogLevel:
        """Set the threshold from a stored preference integer (0-4)."""
        level = level_from_preference(raw)
        self.set_threshold(level)
        return level

    # -- logging --------------------------------------------------------------

    def log(self, level: LogLevel, message: str, /, *,
            origin: Optional[str] = None,
            context: Optional[Hashable] = None,
            **fields: Any) -> None:
        """Log ``message`` at ``level`` if the threshold and filter allow.

        Args:
            level: Message severity.
            message: Text, or a str.format template when ``fields`` are given.
                Formatting happens only after the threshold check.
            origin: Tag for the emitting component (class or module name).
            context: Optional context for console filtering.
            **fields: Values for template placeholders. Any name except
                ``origin`` and ``context`` is allowed, ``level`` and
                ``message`` included.

        Bad templates never raise: the raw template is logged with a
        ``<format error: ...>`` suffix.
        """
        if level < self.state.threshold:
            return

        decision = None
        name = level_name(level)
        line = None
        for sink in self._sinks:
            if sink.filtered and context is not None:
                if decision is None:
                    decision = self.state.filter.decide(context)
                if decision is FilterDecision.DROP:
                    continue
            if line is None:
                line = f"{name}|{origin or DEFAULT_ORIGIN}|{self._render(message, fields)}"
            self._dispatch(sink, level, name, line, context)

    def verbose(self, message: str, /, **kwargs: Any) -> None:
        self.log(LogLevel.VERBOSE, message, **kwargs)

    def debug(self, message: str, /, **kwargs: Any) -> None:
        self.log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, /, **kwargs: Any) -> None:
        self.log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, /, **kwargs: Any) -> None:
        self.log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, /, **kwargs: Any) -> None:
        self.log(LogLevel.ERROR, message, **kwargs)

    def for_origin(self, origin: str) -> "BoundLogger":
        """Return a logger that tags every message with ``origin``."""
        return BoundLogger(self, origin)

    @staticmethod
    def _render(message: str, fields: Dict[str, Any]) -> str:
        if not fields:
            return message
        try:
            return message.format(**fields)
        except Exception as e:
            return f"{message} <format error: {type(e).__name__}: {e}>"

    @staticmethod
    def _dispatch(sink, level, name: str, line: str, context) -> None:
        try:
            text = sink.formatter(level, line, context) if sink.formatter else line
            if text is not None:
                sink.write(name, text)
        except Exception as e:
            # A failing sink must never take the caller down
            print(f"ctxlog: {type(sink).__name__} failed ({e}): {line}",
                  file=sys.stderr)

    # -- assertions -----------------------------------------------------------

    def _assertion_line(self, text: str) -> None:
        self.log(LogLevel.ERROR, text, origin='Assertion')

    def on_assertion_failure(self, where: str, message: str,
                             frames=None) -> AssertionOutcome:
        return self.state.assertions.on_assertion_failure(where, message, frames)

    def assert_that(self, condition, where: str,
                    message: str) -> Optional[AssertionOutcome]:
        return self.state.assertions.check(condition, where, message)

    # -- persistence ----------------------------------------------------------

    @property
    def is_persisting_to_file(self) -> bool:
        return self.state.persist_to_file

    @property
    def file_sink(self) -> FileSink:
        if self._file_sink is None:
            from .config import get_default_log_dir
            self._file_sink = FileSink(get_default_log_dir())
        return self._file_sink

    def set_persist_to_file(self, enabled: bool) -> None:
        """Attach or detach the file sink.

        WARNING: disabling persistence deletes every previously persisted
        log file. This cannot be undone.

        If the log directory cannot be created, persistence stays off and
        the problem is reported on stderr.
        """
        with self._persist_lock:
            if enabled:
                if self.state.persist_to_file:
                    return
                sink = self.file_sink
                try:
                    sink.attach()
                except OSError as e:
                    print(f"ctxlog: cannot persist to {sink.path} ({e})",
                          file=sys.stderr)
                    return
                self._sinks = self._sinks + (sink,)
                self.state.persist_to_file = True
            else:
                if not self.state.persist_to_file:
                    return
                sink = self.file_sink
                self._sinks = tuple(s for s in self._sinks if s is not sink)
                sink.detach()
                sink.purge()
                self.state.persist_to_file = False

    def current_log_file_path(self) -> Optional[Path]:
        """Path of the current log file, or None when not persisting."""
        with self._persist_lock:
            if not self.state.persist_to_file:
                return None
            paths = self.file_sink.list_persisted_file_paths()
        return paths[0] if paths else None

    def current_log_file_contents(self) -> Optional[str]:
        """Contents of the current log file, or None when unavailable."""
        path = self.current_log_file_path()
        if path is None:
            return None
        try:
            return path.read_text(encoding='utf-8', errors='replace')
        except OSError:
            return None


class BoundLogger:
    """Level entry points with a fixed origin tag."""

    def __init__(self, facade: LogFacade, origin: str):
        self.facade = facade
        self.origin = origin

    def log(self, level: LogLevel, message: str, /, *,
            context: Optional[Hashable] = None, **fields: Any) -> None:
        self.facade.log(level, message, origin=self.origin,
                        context=context, **fields)

    def verbose(self, message: str, /, **kwargs: Any) -> None:
        self.log(LogLevel.VERBOSE, message, **kwargs)

    def debug(self, message: str, /, **kwargs: Any) -> None:
        self.log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, /, **kwargs: Any) -> None:
        self.log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, /, **kwargs: Any) -> None:
        self.log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, /, **kwargs: Any) -> None:
        self.log(LogLevel.ERROR, message, **kwargs)


# =============================================================================
# Module-level singleton
# =============================================================================

_facade: Optional[LogFacade] = None


def build_facade(config: Dict[str, Any] = None, file=None) -> LogFacade:
    """Build a LogFacade from a resolved config dict.

    Recognized keys: log_level, log_to_file, log_dir, filter_mode,
    blacklist, whitelist, record_assertions, debug, color.
    Unknown context names in the lists are reported and skipped.

    Args:
        config: Output of config.load_logging_config() (or any dict).
        file: Console stream; stderr when None.
    """
    config = dict(config or {})
    debug = bool(config.get('debug', False))

    sinks = [ConsoleSink(file=file, colors=bool(config.get('color', False)))]
    if debug:
        sinks.append(StdlibSink())

    file_sink = None
    if config.get('log_dir'):
        file_sink = FileSink(Path(config['log_dir']).expanduser())

    facade = LogFacade(sinks=sinks, file_sink=file_sink, debug=debug)

    if config.get('log_level') is not None:
        facade.apply_level_from_preference(config['log_level'])

    flt = facade.filter
    for key, add in (('blacklist', flt.add_to_blacklist),
                     ('whitelist', flt.add_to_whitelist)):
        for spec in config.get(key) or []:
            try:
                add(parse_context_spec(spec))
            except ValueError as e:
                facade.warning("Ignoring {key} entry: {err}",
                               origin='Config', key=key, err=e)
    if config.get('filter_mode') == FilterMode.WHITELIST.value:
        flt.activate_whitelist()

    facade.assertions.set_recording_enabled(
        bool(config.get('record_assertions', False)))

    if config.get('log_to_file'):
        facade.set_persist_to_file(True)
    return facade


def init_logging(config: Dict[str, Any] = None, file=None) -> LogFacade:
    """Initialize the module-level LogFacade singleton.

    Call once at program startup. Calling it again replaces the facade
    (the previous one keeps working for anyone still holding it).
    """
    global _facade
    _facade = build_facade(config, file=file)
    return _facade


def get_logging() -> LogFacade:
    """Get the module-level LogFacade, creating a default if needed."""
    global _facade
    if _facade is None:
        _facade = LogFacade()
    return _facade
