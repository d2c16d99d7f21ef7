"""Leveled, color-coded console output."""

import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import TextIO

from colorama import Fore, Style


class Level(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"


LEVEL_COLORS = {
    Level.INFO: Fore.CYAN,
    Level.WARN: Fore.YELLOW,
    Level.ERROR: Fore.RED,
    Level.SUCCESS: Fore.GREEN,
}
DEFAULT_COLOR = Fore.WHITE


@dataclass(frozen=True)
class LogEntry:
    """A single log record. Built, formatted and emitted immediately."""
    timestamp: str
    level: Level
    message: str

    def format(self) -> str:
        return f"[{self.timestamp}] [{self.level.value}] {self.message}"


def color_for(level: Level) -> str:
    return LEVEL_COLORS.get(level, DEFAULT_COLOR)


class Logger:
    """Writes one line per event to a sink (stdout unless told otherwise).

    Each line is flushed immediately so it interleaves with subprocess output.
    """

    def __init__(self, sink: TextIO | None = None, color: bool = True):
        self._sink = sink
        self.color = color

    @property
    def sink(self) -> TextIO:
        # Resolved late so pytest's capsys swap of sys.stdout is honored
        return self._sink if self._sink is not None else sys.stdout

    def log(self, level: Level, message: str) -> None:
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            level=level,
            message=message,
        )
        line = entry.format()
        if self.color:
            line = f"{color_for(level)}{line}{Style.RESET_ALL}"
        print(line, file=self.sink, flush=True)

    def info(self, message: str) -> None:
        self.log(Level.INFO, message)

    def warn(self, message: str) -> None:
        self.log(Level.WARN, message)

    def error(self, message: str) -> None:
        self.log(Level.ERROR, message)

    def success(self, message: str) -> None:
        self.log(Level.SUCCESS, message)
