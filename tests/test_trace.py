"""Tests for ctxlog.trace: function tracing through the facade."""

from pathlib import Path

import pytest

from conftest import ListSink
from ctxlog import manager as _manager_mod
from ctxlog.contexts import TRACE
from ctxlog.levels import LogLevel
from ctxlog.manager import LogFacade
from ctxlog.trace import trace


@pytest.fixture
def sink(monkeypatch):
    """Install a VERBOSE facade with one console-like filtered sink."""
    sink = ListSink(filtered=True)
    facade = LogFacade(sinks=[sink], threshold=LogLevel.VERBOSE)
    monkeypatch.setattr(_manager_mod, "_facade", facade)
    return sink


@trace
def add(a, b):
    return a + b


@trace
def nothing():
    return None


@trace
def explode():
    raise RuntimeError("kaboom")


class Greeter:
    @trace
    def greet(self, name):
        return f"hi {name}"


class TestTrace:
    """Entry/exit lines at VERBOSE on the trace context."""

    def test_entry_and_exit(self, sink):
        assert add(1, 2) == 3
        assert sink.texts == [
            f"VERBOSE|{__name__}|>> add(1, 2)",
            f"VERBOSE|{__name__}|<< add returned: 3",
        ]

    def test_none_result_not_logged(self, sink):
        nothing()
        assert len(sink.lines) == 1

    def test_exception_logged_and_reraised(self, sink):
        with pytest.raises(RuntimeError):
            explode()
        assert sink.texts[-1] == f"VERBOSE|{__name__}|!! explode raised: RuntimeError: kaboom"

    def test_method_shows_self(self, sink):
        Greeter().greet("bob")
        assert sink.texts[0] == f"VERBOSE|{__name__}|>> greet(self, 'bob')"

    def test_long_arguments_shortened(self, sink):
        @trace
        def take(items, path, text=""):
            return None

        take([1, 2, 3, 4, 5], Path("a"), text="x" * 60)
        entry = sink.texts[0]
        assert "[...5 items...]" in entry
        assert "Path('a')" in entry
        assert "text='" + "x" * 47 + "...'" in entry

    def test_silent_above_verbose(self, sink):
        _manager_mod.get_logging().set_threshold(LogLevel.DEBUG)
        assert add(2, 2) == 4
        assert sink.lines == []

    def test_trace_context_can_be_blacklisted(self, sink):
        _manager_mod.get_logging().filter.add_to_blacklist(TRACE)
        add(1, 1)
        assert sink.lines == []

    def test_preserves_metadata(self):
        assert add.__name__ == "add"
