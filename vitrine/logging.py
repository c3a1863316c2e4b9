"""Tagged log lines stamped with elapsed time and the render frame.

Every line looks like ``[  1.234s F000042] [TAG] message``. Output goes to
stdout unless a stream is set; the CLI points it at stderr.
"""

from __future__ import annotations
import sys
import time
import traceback
from typing import Optional, TextIO


class Logger:
    def __init__(self, quiet: bool = False, stream: Optional[TextIO] = None):
        self.started = time.perf_counter()
        self.frame = 0
        self.quiet = quiet
        self.stream = stream

    def increment_frame(self) -> None:
        self.frame += 1

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.started

    def format(self, msg: str) -> str:
        return f"[{self.elapsed:7.3f}s F{self.frame:06d}] {msg}\n"

    def _write(self, out: TextIO, line: str) -> None:
        out.write(line)
        out.flush()

    def log(self, msg: str) -> None:
        if self.quiet:
            return
        line = self.format(msg)
        # A closed or broken stream must never take the caller down
        try:
            self._write(self.stream or sys.stdout, line)
        except (OSError, ValueError):
            try:
                self._write(sys.stderr, line)
            except (OSError, ValueError):
                pass

    __call__ = log


_logger = Logger()


def log(msg: str) -> None:
    _logger.log(msg)


def log_exception(tag: str, exc: BaseException) -> None:
    """Log an exception and its traceback under a subsystem tag."""
    log(f"[{tag}][ERR] {exc!r}")
    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    log(f"[{tag}][ERR] Traceback:\n{tb}")


def set_quiet(quiet: bool) -> None:
    _logger.quiet = quiet


def set_stream(stream: Optional[TextIO]) -> None:
    """Send log lines to stream; None restores stdout."""
    _logger.stream = stream


def increment_frame() -> None:
    _logger.increment_frame()


def now() -> float:
    """Monotonic high-resolution clock in seconds."""
    return time.perf_counter()
