"""Shared test fixtures for ctxlog test suite."""

import io
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from ctxlog import contexts as _contexts_mod
from ctxlog import manager as _manager_mod
from ctxlog.levels import LogLevel
from ctxlog.manager import LogFacade
from ctxlog.sinks import ConsoleSink, FileSink


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: multi-threaded stress tests")


# ---------------------------------------------------------------------------
# Global state isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _isolate_globals():
    """Reset the facade singleton and the context registry around each test."""
    saved_contexts = dict(_contexts_mod._CONTEXTS)
    saved_descriptions = dict(_contexts_mod.CONTEXT_DESCRIPTIONS)
    _manager_mod._facade = None
    yield
    _manager_mod._facade = None
    _contexts_mod._CONTEXTS.clear()
    _contexts_mod._CONTEXTS.update(saved_contexts)
    _contexts_mod.CONTEXT_DESCRIPTIONS.clear()
    _contexts_mod.CONTEXT_DESCRIPTIONS.update(saved_descriptions)


# ---------------------------------------------------------------------------
# Sinks and facades
# ---------------------------------------------------------------------------
class ListSink:
    """Sink collecting (level_name, text) pairs in memory."""

    def __init__(self, filtered=False, formatter=None):
        self.filtered = filtered
        self.formatter = formatter
        self.lines = []

    def write(self, level_name, text):
        self.lines.append((level_name, text))

    @property
    def texts(self):
        return [text for _, text in self.lines]


@pytest.fixture
def buf():
    """A StringIO buffer for capturing console output."""
    return io.StringIO()


@pytest.fixture
def console(buf):
    """A ConsoleSink writing to the buffer (no colours)."""
    return ConsoleSink(file=buf)


@pytest.fixture
def unfiltered():
    """An in-memory sink that ignores the context filter."""
    return ListSink(filtered=False)


@pytest.fixture
def file_sink(tmp_path):
    """A FileSink rooted in a temporary directory."""
    return FileSink(tmp_path / "logs")


@pytest.fixture
def facade(console, unfiltered, file_sink):
    """A LogFacade at VERBOSE with a console, a list sink and a file sink."""
    return LogFacade(
        sinks=[console, unfiltered],
        file_sink=file_sink,
        threshold=LogLevel.VERBOSE,
    )


def console_lines(buf):
    """Non-empty lines written to a console buffer."""
    return [line for line in buf.getvalue().splitlines() if line]


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def tmp_config_home(tmp_path):
    """Provide a temporary home directory for ~/.ctxlog/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


@pytest.fixture
def tmp_project(tmp_path, monkeypatch):
    """An empty project directory used as the working directory."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project
