"""Tests for ctxlog.levels: level ordering, names, parsing, preferences."""

import pytest

from ctxlog.levels import (
    LEVEL_NAMES, LogLevel, default_threshold, level_from_preference,
    level_name, ordinal, parse_level, shift_level,
)


class TestOrdering:
    """Verify the closed level set and its fixed order."""

    def test_level_ordering(self):
        """VERBOSE < DEBUG < INFO < WARNING < ERROR."""
        assert (LogLevel.VERBOSE < LogLevel.DEBUG < LogLevel.INFO
                < LogLevel.WARNING < LogLevel.ERROR)

    def test_ordinals(self):
        """Ordinals run 0..4."""
        assert [ordinal(level) for level in LogLevel] == [0, 1, 2, 3, 4]

    def test_every_level_has_a_name(self):
        assert set(LEVEL_NAMES) == set(LogLevel)


class TestLevelName:
    """Test canonical name lookup."""

    @pytest.mark.parametrize("level,name", [
        (LogLevel.VERBOSE, "VERBOSE"),
        (LogLevel.DEBUG, "DEBUG"),
        (LogLevel.INFO, "INFO"),
        (LogLevel.WARNING, "WARNING"),
        (LogLevel.ERROR, "ERROR"),
    ])
    def test_canonical_names(self, level, name):
        assert level_name(level) == name

    def test_plain_int_in_range(self):
        """Raw ints inside the set resolve like the enum."""
        assert level_name(2) == "INFO"

    def test_unknown_level_placeholder(self):
        """Out-of-range values give a placeholder instead of raising."""
        assert level_name(9) == "<unknown level 9>"

    def test_non_numeric_placeholder(self):
        assert level_name("loud") == "<unknown level loud>"


class TestParseLevel:
    """Test parse_level(): case-insensitive with ERROR fallback."""

    def test_round_trip(self):
        """parse(name(level)) == level for every level."""
        for level in LogLevel:
            assert parse_level(level_name(level)) is level

    def test_case_insensitive(self):
        assert parse_level("warning") is LogLevel.WARNING
        assert parse_level("Debug") is LogLevel.DEBUG

    def test_whitespace_ignored(self):
        assert parse_level("  info\n") is LogLevel.INFO

    def test_unknown_defaults_to_error(self):
        """Bad config under-logs: unknown names map to ERROR."""
        assert parse_level("chatty") is LogLevel.ERROR
        assert parse_level("") is LogLevel.ERROR

    def test_none_defaults_to_error(self):
        assert parse_level(None) is LogLevel.ERROR


class TestPreferences:
    """Test the stored-preference integer mapping."""

    @pytest.mark.parametrize("raw,level", [
        (0, LogLevel.VERBOSE),
        (1, LogLevel.DEBUG),
        (2, LogLevel.INFO),
        (3, LogLevel.WARNING),
        (4, LogLevel.ERROR),
    ])
    def test_mapping(self, raw, level):
        assert level_from_preference(raw) is level

    @pytest.mark.parametrize("raw", [None, -1, 5, 99, "abc", True])
    def test_anything_else_is_verbose(self, raw):
        """Missing or invalid preferences map to the most verbose level."""
        assert level_from_preference(raw) is LogLevel.VERBOSE

    def test_numeric_string(self):
        """Preferences read from text files still map."""
        assert level_from_preference("3") is LogLevel.WARNING


class TestThresholdHelpers:
    """Test default_threshold() and shift_level()."""

    def test_default_threshold_debug(self):
        assert default_threshold(debug=True) is LogLevel.VERBOSE

    def test_default_threshold_production(self):
        assert default_threshold() is LogLevel.INFO

    def test_shift_more_verbose(self):
        assert shift_level(LogLevel.INFO, -1) is LogLevel.DEBUG

    def test_shift_quieter(self):
        assert shift_level(LogLevel.INFO, 2) is LogLevel.ERROR

    def test_shift_clamped(self):
        assert shift_level(LogLevel.DEBUG, -5) is LogLevel.VERBOSE
        assert shift_level(LogLevel.WARNING, 5) is LogLevel.ERROR
