"""Log entry model — frozen dataclass + single-line rendering."""

import re
from dataclasses import dataclass
from datetime import datetime

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

LINE_PATTERN = re.compile(
    r"^\[(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\] \[([^\]]*)\] (.*)$"
)


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    level: str
    message: str

    def render(self) -> str:
        """Return the entry as ``[<timestamp>] [<level>] <message>`` (no newline)."""
        stamp = self.timestamp.strftime(TIMESTAMP_FORMAT)
        return f"[{stamp}] [{self.level}] {self.message}"


def format_line(level: str, message: str, now: datetime) -> str:
    return LogEntry(timestamp=now, level=level, message=message).render()
