"""Tests for antigravity_healer/logger.py."""

import io
import re

from colorama import Fore, Style

from antigravity_healer.logger import DEFAULT_COLOR, Level, LogEntry, Logger, color_for

LINE_RE = re.compile(r"^\[(?P<ts>[^\]]+)\] \[(?P<level>[A-Z]+)\] (?P<msg>.*)$")


def test_plain_line_format():
    sink = io.StringIO()
    Logger(sink=sink, color=False).log(Level.INFO, "hello world")

    line = sink.getvalue()
    assert line.endswith("\n")
    match = LINE_RE.match(line.rstrip("\n"))
    assert match is not None
    assert match.group("level") == "INFO"
    assert match.group("msg") == "hello world"
    assert "T" in match.group("ts")


def test_colored_line_wraps_in_level_color():
    sink = io.StringIO()
    Logger(sink=sink).log(Level.ERROR, "boom")

    line = sink.getvalue().rstrip("\n")
    assert line.startswith(Fore.RED)
    assert line.endswith(Style.RESET_ALL)
    assert "[ERROR] boom" in line


def test_level_colors():
    assert color_for(Level.INFO) == Fore.CYAN
    assert color_for(Level.WARN) == Fore.YELLOW
    assert color_for(Level.ERROR) == Fore.RED
    assert color_for(Level.SUCCESS) == Fore.GREEN
    assert color_for("DEBUG") == DEFAULT_COLOR


def test_convenience_methods_map_to_levels():
    sink = io.StringIO()
    logger = Logger(sink=sink, color=False)
    logger.info("a")
    logger.warn("b")
    logger.error("c")
    logger.success("d")

    levels = [LINE_RE.match(line).group("level") for line in sink.getvalue().splitlines()]
    assert levels == ["INFO", "WARN", "ERROR", "SUCCESS"]


def test_default_sink_is_stdout(capsys):
    Logger(color=False).info("to stdout")
    assert "[INFO] to stdout" in capsys.readouterr().out


def test_log_entry_format():
    entry = LogEntry(timestamp="2024-01-01T00:00:00.000+00:00", level=Level.WARN, message="careful")
    assert entry.format() == "[2024-01-01T00:00:00.000+00:00] [WARN] careful"
