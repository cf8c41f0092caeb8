"""
Console output for the Simple Test Framework.

This module owns the human-readable report written to stdout: progress
lines, failure banners, exclusion notices and timing.
"""

import sys
import threading
from typing import Optional, TextIO
import logging

logger = logging.getLogger(__name__)

NANOSECONDS_PER_SECOND = 1_000_000_000
NANOSECONDS_PER_MILLISECOND = 1_000_000
NANOSECONDS_PER_MICROSECOND = 1_000


def friendly_duration(duration_ns: int) -> str:
    """
    Render a duration using the coarsest unit that keeps the value >= 1.

    Args:
        duration_ns: Duration in nanoseconds

    Returns:
        A string such as "1.234 s", "12.5 ms" or "0.75 us"
    """
    if duration_ns >= NANOSECONDS_PER_SECOND:
        milliseconds = duration_ns // NANOSECONDS_PER_MILLISECOND
        return f"{milliseconds / 1000.0} s"

    if duration_ns >= NANOSECONDS_PER_MILLISECOND:
        microseconds = duration_ns // NANOSECONDS_PER_MICROSECOND
        return f"{microseconds / 1000.0} ms"

    return f"{duration_ns / 1000.0} us"


class ConsoleReporter:
    """Writes the run report; safe to call from worker threads."""

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Initialize reporter.

        Args:
            stream: Output stream (defaults to sys.stdout at write time, so
                capture fixtures that swap sys.stdout see the output)
        """
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str) -> None:
        """Write text without a newline and flush."""
        with self._lock:
            self.stream.write(text)
            self.stream.flush()

    def line(self, text: str = "") -> None:
        """Write a full line."""
        self.write(text + "\n")

    def flush(self) -> None:
        with self._lock:
            self.stream.flush()

    def assertion_failed(self, file: str, line: int) -> None:
        self.line()
        self.line(f"Assertion failed at {file}:{line}")

    def no_tests(self) -> None:
        self.line("Error: there are no registered tests")

    def registration_failures(self, count: int) -> None:
        self.line(f"Error: {count} tests failed to register or get excluded")

    def duplicate_names(self, names) -> None:
        self.line(f"Error: duplicate test names registered: {', '.join(sorted(names))}")

    def test_count(self, count: int) -> None:
        self.line(f"Total numbers of tests: {count}")

    def excluding(self, name: str) -> None:
        self.line(f"Excluding test {name}")

    def running(self, name: str) -> None:
        self.write(f"Running test {name}")

    def test_duration(self, duration_ns: int) -> None:
        self.line(f" ({friendly_duration(duration_ns)})")

    def unexpected_exception(self, message: Optional[str] = None) -> None:
        self.line()
        if message:
            self.line(f"Unexpected exception thrown: {message}")
        else:
            self.line("Unexpected exception thrown")

    def timeout(self, message: str) -> None:
        self.line()
        self.line(message)

    def all_passed(self, total_ns: int) -> None:
        self.line(f"All test(s) passed successfully ({friendly_duration(total_ns)} total)")
