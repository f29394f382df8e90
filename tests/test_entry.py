"""Tests for the log entry model."""

from datetime import datetime

import pytest
from errlog.entry import LINE_PATTERN, TIMESTAMP_FORMAT, LogEntry, format_line


class TestRender:
    def test_exact_format(self):
        entry = LogEntry(datetime(2025, 3, 6, 12, 34, 56), "ERROR", "disk full")
        assert entry.render() == "[2025-03-06 12:34:56] [ERROR] disk full"

    def test_zero_padded_fields(self):
        line = format_line("WARNING", "low memory", datetime(2025, 1, 2, 3, 4, 5))
        assert line == "[2025-01-02 03:04:05] [WARNING] low memory"

    def test_microseconds_dropped(self):
        line = format_line("INFO", "x", datetime(2025, 1, 2, 3, 4, 5, 999999))
        assert line.startswith("[2025-01-02 03:04:05] ")

    def test_level_kept_as_given(self):
        line = format_line("fatal", "x", datetime(2025, 1, 1))
        assert "[fatal]" in line

    def test_no_line_terminator(self):
        assert not format_line("INFO", "x", datetime(2025, 1, 1)).endswith("\n")

    def test_frozen(self):
        entry = LogEntry(datetime(2025, 1, 1), "INFO", "x")
        with pytest.raises(AttributeError):
            entry.level = "ERROR"


class TestLinePattern:
    def test_matches_rendered_line(self):
        line = format_line("ERROR", "cfg missing", datetime(2025, 3, 6, 12, 34, 56))
        match = LINE_PATTERN.match(line)
        assert match is not None
        assert match.groups() == ("2025-03-06 12:34:56", "ERROR", "cfg missing")

    def test_rejects_raw_text(self):
        assert LINE_PATTERN.match("Traceback (most recent call last):") is None

    def test_timestamp_format(self):
        assert TIMESTAMP_FORMAT == "%Y-%m-%d %H:%M:%S"
