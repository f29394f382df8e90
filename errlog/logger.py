"""Append-only error logger: one file handle, one formatted line per call."""

import logging
import os
import threading
from dataclasses import dataclass
from datetime import datetime

from errlog.entry import format_line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Active:
    path: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Disabled:
    path: str
    reason: str

    @property
    def ok(self) -> bool:
        return False


class Logger:
    """File-backed logger that degrades to a no-op instead of raising.

    Construction always succeeds. If the file cannot be opened, a warning is
    emitted once and ``status`` is ``Disabled``; every later write is
    silently dropped.
    """

    def __init__(
        self,
        path: str,
        time_func=None,
        create_dirs: bool = False,
        encoding: str = "utf-8",
    ):
        self.path = path
        self._time_func = time_func or datetime.now
        self._lock = threading.Lock()
        self._reporting = threading.local()
        self._file = None

        try:
            if create_dirs:
                parent = os.path.dirname(os.path.abspath(path))
                os.makedirs(parent, exist_ok=True)
            # Line-buffered: each entry reaches the OS when log() returns.
            self._file = open(path, "a", encoding=encoding, buffering=1)
        except (OSError, ValueError, LookupError) as e:
            # ValueError: invalid path (embedded null byte). LookupError: unknown encoding.
            logger.warning("Cannot open log file %s, logging disabled: %s", path, e)
            self.status = Disabled(path=path, reason=str(e))
        else:
            self.status = Active(path=path)

    @property
    def closed(self) -> bool:
        return self._file is None

    def log(self, level: str, message: str) -> bool:
        """Append one entry. Returns True if written, False if dropped."""
        if self._file is None:
            return False
        line = format_line(level, message, self._time_func())
        return self.write_raw(line + "\n")

    def write_raw(self, text: str) -> bool:
        """Append text verbatim, without timestamp or level."""
        error = None
        with self._lock:
            if self._file is None:
                return False
            try:
                self._file.write(text)
            except (OSError, ValueError) as e:
                error = e
        if error is not None:
            self._report("Write to %s failed: %s", self.path, error)
            return False
        return True

    def log_error(self, message: str) -> bool:
        return self.log("ERROR", message)

    def log_warning(self, message: str) -> bool:
        return self.log("WARNING", message)

    def log_info(self, message: str) -> bool:
        return self.log("INFO", message)

    def log_exception(self, exc: BaseException, level: str = "ERROR") -> bool:
        """Log a caught exception's message (no traceback)."""
        return self.log(level, str(exc) or type(exc).__name__)

    def flush(self):
        error = None
        with self._lock:
            if self._file is not None:
                try:
                    self._file.flush()
                except (OSError, ValueError) as e:
                    error = e
        if error is not None:
            self._report("Flush of %s failed: %s", self.path, error)

    def fileno(self) -> int:
        """Descriptor of the open log file. Raises ValueError when disabled or closed."""
        if self._file is None:
            raise ValueError(f"Logger for {self.path} has no open file")
        return self._file.fileno()

    def close(self):
        """Release the file handle. Safe to call more than once."""
        error = None
        with self._lock:
            if self._file is None:
                return
            handle, self._file = self._file, None
            try:
                handle.close()
            except OSError as e:
                error = e
        if error is not None:
            self._report("Close of %s failed: %s", self.path, error)

    def _report(self, msg, *args):
        # Called with the lock released. A handler writing to a bound stderr
        # sink comes back through write_raw(); failures there are not reported again.
        if getattr(self._reporting, "active", False):
            return
        self._reporting.active = True
        try:
            logger.debug(msg, *args)
        finally:
            self._reporting.active = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
