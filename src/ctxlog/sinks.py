"""
Sinks and formatters.

A sink is anything with ``write(level_name, text)``. The facade decides
*whether* a message goes out; sinks only decide *how*.

    ConsoleSink   text stream (stderr by default), optional ANSI colours,
                  subject to context filtering (``filtered = True``)
    FileSink      rotating log files via logging.handlers, unfiltered,
                  attached and detached at runtime
    StdlibSink    forwards to a standard ``logging`` logger (system log
                  analogue for debug deployments), unfiltered

Each sink may carry a formatter: ``formatter(level, text, context)``
returning the final text, or None to drop the message for that sink.
"""

import logging
import logging.handlers
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Callable, Hashable, List, Optional, Protocol, TextIO

from .levels import LogLevel

Formatter = Callable[[LogLevel, str, Optional[Hashable]], Optional[str]]

# Level name → standard library level, for sinks built on logging
STDLIB_LEVELS = {
    'VERBOSE': 5,
    'DEBUG':   logging.DEBUG,
    'INFO':    logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR':   logging.ERROR,
}

ANSI_COLORS = {
    'INFO':    '\033[32m',   # green
    'WARNING': '\033[33m',   # orange/yellow
    'ERROR':   '\033[31m',   # red
}
ANSI_RESET = '\033[0m'

DEFAULT_LOG_FILE = 'ctxlog.log'
DEFAULT_ROLLING_HOURS = 48
DEFAULT_MAX_FILES = 3


class Sink(Protocol):
    """Destination for formatted log lines."""

    filtered: bool
    formatter: Optional[Formatter]

    def write(self, level_name: str, text: str) -> None:
        ...


class TimestampFormatter:
    """Prefix each line with a local timestamp (millisecond precision)."""

    def __init__(self, fmt: str = "%Y-%m-%d %H:%M:%S.%f"):
        self.fmt = fmt

    def __call__(self, level, text: str, context=None) -> str:
        stamp = datetime.now().strftime(self.fmt)
        if self.fmt.endswith("%f"):
            stamp = stamp[:-3]
        return f"{stamp} {text}"


class ConsoleSink:
    """Writes lines to a text stream, one print() per message."""

    filtered = True

    def __init__(self, file: TextIO = None, colors: bool = False,
                 formatter: Optional[Formatter] = None):
        self.file = file if file is not None else sys.stderr
        self.colors = colors
        self.formatter = formatter
        self._lock = threading.Lock()

    def write(self, level_name: str, text: str) -> None:
        color = ANSI_COLORS.get(level_name) if self.colors else None
        if color:
            text = f"{color}{text}{ANSI_RESET}"
        with self._lock:
            print(text, file=self.file)


class StdlibSink:
    """Forwards lines to a standard library logger."""

    filtered = False

    def __init__(self, logger_name: str = 'ctxlog',
                 formatter: Optional[Formatter] = None):
        self.logger = logging.getLogger(logger_name)
        self.formatter = formatter

    def write(self, level_name: str, text: str) -> None:
        self.logger.log(STDLIB_LEVELS.get(level_name, logging.DEBUG), text)


class FileSink:
    """Rotating log files under ``log_dir``.

    Rotation and retention are delegated to
    ``logging.handlers.TimedRotatingFileHandler``: a new file every
    ``rolling_hours`` hours, at most ``max_files`` files kept (current
    one included). The file is created lazily on the first write.

    The sink does nothing until attach() is called.
    """

    filtered = False

    def __init__(self, log_dir, file_name: str = DEFAULT_LOG_FILE,
                 rolling_hours: int = DEFAULT_ROLLING_HOURS,
                 max_files: int = DEFAULT_MAX_FILES,
                 formatter: Optional[Formatter] = None):
        self.log_dir = Path(log_dir)
        self.file_name = file_name
        self.rolling_hours = rolling_hours
        self.max_files = max_files
        self.formatter = formatter if formatter is not None else TimestampFormatter()
        self._handler: Optional[logging.handlers.TimedRotatingFileHandler] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        """Path of the file currently being written."""
        return self.log_dir / self.file_name

    @property
    def attached(self) -> bool:
        return self._handler is not None

    def attach(self) -> None:
        with self._lock:
            if self._handler is not None:
                return
            self.log_dir.mkdir(parents=True, exist_ok=True)
            handler = logging.handlers.TimedRotatingFileHandler(
                str(self.path),
                when='H',
                interval=self.rolling_hours,
                backupCount=max(self.max_files - 1, 0),
                encoding='utf-8',
                delay=True,
            )
            handler.setFormatter(logging.Formatter('%(message)s'))
            self._handler = handler

    def detach(self) -> None:
        with self._lock:
            if self._handler is None:
                return
            self._handler.close()
            self._handler = None

    def write(self, level_name: str, text: str) -> None:
        with self._lock:
            if self._handler is None:
                return
            record = logging.LogRecord(
                name='ctxlog', level=STDLIB_LEVELS.get(level_name, logging.DEBUG),
                pathname=__file__, lineno=0, msg=text, args=None, exc_info=None,
            )
            self._handler.handle(record)

    def list_persisted_file_paths(self) -> List[Path]:
        """Existing log files, current file first, then newest to oldest."""
        if not self.log_dir.is_dir():
            return []
        current = self.path
        files = [p for p in self.log_dir.glob(f"{self.file_name}*") if p.is_file()]
        return sorted(files, key=lambda p: (p != current, -p.stat().st_mtime))

    def purge(self) -> None:
        """Delete every persisted log file."""
        for path in self.list_persisted_file_paths():
            path.unlink(missing_ok=True)
