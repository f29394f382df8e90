"""Process-wide stderr capture: binds ``sys.stderr`` to a Logger's file.

Only one binding exists at a time. ``bind()`` replaces any previous binding
and ``unbind()`` restores the stream that was in place before.
"""

import io
import logging
import os
import sys
import threading

from errlog.logger import Logger

logger = logging.getLogger(__name__)

STDERR_FD = 2

_lock = threading.Lock()
_active = None


class StderrSink(io.TextIOBase):
    """Text stream that forwards everything written to it into a Logger.

    With ``level=None`` text is appended verbatim. With a level, text is
    split into lines and each complete line becomes a regular log entry.
    """

    def __init__(self, target: Logger, original, level: str | None = None):
        super().__init__()
        self.target = target
        self.original = original
        self.level = level
        self.saved_fd = None
        self._pending = ""
        self._lock = threading.Lock()

    @property
    def encoding(self):
        return getattr(self.original, "encoding", None) or "utf-8"

    def writable(self) -> bool:
        return True

    def fileno(self) -> int:
        if self.saved_fd is None:
            raise io.UnsupportedOperation("stderr is not redirected at descriptor level")
        return STDERR_FD

    def write(self, text: str) -> int:
        if self.level is None:
            self.target.write_raw(text)
            return len(text)

        with self._lock:
            self._pending += text
            *lines, self._pending = self._pending.split("\n")
        for line in lines:
            self.target.log(self.level, line.rstrip("\r"))
        return len(text)

    def flush(self):
        self.target.flush()

    def drain(self):
        """Emit a trailing partial line, if any, as its own entry."""
        with self._lock:
            pending, self._pending = self._pending, ""
        pending = pending.rstrip("\r")
        if pending and self.level is not None:
            self.target.log(self.level, pending)


def bind(target: Logger, level: str | None = None, fd_level: bool = False) -> StderrSink:
    """Redirect ``sys.stderr`` (and optionally descriptor 2) into *target*."""
    global _active
    with _lock:
        if _active is not None:
            _release(_active)

        sink = StderrSink(target, sys.stderr, level=level)
        if fd_level:
            _redirect_fd(sink)
        sys.stderr = sink
        _active = sink
    return sink


def unbind():
    """Restore the stderr stream that was active before ``bind()``."""
    global _active
    with _lock:
        if _active is None:
            return
        _release(_active)
        _active = None


def is_bound() -> bool:
    return _active is not None


def current() -> StderrSink | None:
    return _active


def _redirect_fd(sink: StderrSink):
    try:
        target_fd = sink.target.fileno()
    except ValueError:
        logger.debug("Logger for %s is not active, descriptor 2 left alone", sink.target.path)
        return

    try:
        sink.original.flush()
    except (OSError, ValueError) as e:
        logger.debug("Flush of original stderr failed: %s", e)

    saved = None
    try:
        saved = os.dup(STDERR_FD)
        os.dup2(target_fd, STDERR_FD)
    except OSError as e:
        logger.warning("Cannot redirect descriptor %d: %s", STDERR_FD, e)
        if saved is not None:
            os.close(saved)
        return
    sink.saved_fd = saved


def _release(sink: StderrSink):
    sink.drain()
    sink.flush()

    if sys.stderr is sink:
        sys.stderr = sink.original
    else:
        logger.debug("sys.stderr was replaced after bind(), leaving it in place")

    if sink.saved_fd is not None:
        os.dup2(sink.saved_fd, STDERR_FD)
        os.close(sink.saved_fd)
        sink.saved_fd = None
