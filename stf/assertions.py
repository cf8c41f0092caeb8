"""
Assertions used inside test bodies.

Every assertion records the caller's file and line, asks the active
Comparator to check its condition and, on failure, sets the process-wide
failure signal and raises AssertionFailure. Raising ends the current test
body at once while its `with` blocks and `finally` clauses still release
whatever the test acquired; the runner's worker turns the exception into a
failed test.
"""

import sys
from typing import Any, Callable, Optional, Tuple

from .comparator import Comparator, ExpectedException
from .config import HarnessConfig
from .exceptions import AssertionFailure
from .state import FAILURE_SIGNAL

_comparator = Comparator.from_config(HarnessConfig())


def get_comparator() -> Comparator:
    return _comparator


def set_comparator(comparator: Comparator) -> Comparator:
    """Install the comparator used by the assertions; returns the previous one."""
    global _comparator
    previous = _comparator
    _comparator = comparator
    return previous


def _caller() -> Tuple[str, int]:
    # 0: _caller, 1: the assert_* function, 2: the test body
    frame = sys._getframe(2)
    return frame.f_code.co_filename, frame.f_lineno


def _fail(assertion: str, file: str, line: int):
    FAILURE_SIGNAL.set()
    raise AssertionFailure(f"{assertion} failed at {file}:{line}", file=file, line=line)


def assert_eq(expected: Any, actual: Any) -> None:
    file, line = _caller()
    if not _comparator.check_equal(file, line, expected, actual):
        _fail("assert_eq", file, line)


def assert_ne(a: Any, b: Any) -> None:
    file, line = _caller()
    if not _comparator.check_not_equal(file, line, a, b):
        _fail("assert_ne", file, line)


def assert_gt(a: Any, b: Any) -> None:
    file, line = _caller()
    if not _comparator.check_greater(file, line, a, b):
        _fail("assert_gt", file, line)


def assert_ge(a: Any, b: Any) -> None:
    file, line = _caller()
    if not _comparator.check_greater_equal(file, line, a, b):
        _fail("assert_ge", file, line)


def assert_lt(a: Any, b: Any) -> None:
    file, line = _caller()
    if not _comparator.check_less(file, line, a, b):
        _fail("assert_lt", file, line)


def assert_le(a: Any, b: Any) -> None:
    file, line = _caller()
    if not _comparator.check_less_equal(file, line, a, b):
        _fail("assert_le", file, line)


def assert_true(value: Any) -> None:
    file, line = _caller()
    if not _comparator.check_boolean(file, line, value, True):
        _fail("assert_true", file, line)


def assert_false(value: Any) -> None:
    file, line = _caller()
    if not _comparator.check_boolean(file, line, value, False):
        _fail("assert_false", file, line)


def assert_close(a: Any, b: Any, epsilon: Any) -> None:
    """Assert abs(a - b) < epsilon in the operands' floating point precision."""
    file, line = _caller()
    if not _comparator.check_close(file, line, a, b, epsilon):
        _fail("assert_close", file, line)


def assert_mem_eq(a: Any, b: Any, length: int) -> None:
    """Assert the first length octets of two buffers are identical."""
    file, line = _caller()
    if not _comparator.check_memory_equal(file, line, a, b, length):
        _fail("assert_mem_eq", file, line)


def assert_mem_ne(a: Any, b: Any, length: int) -> None:
    """Assert the first length octets of two buffers differ."""
    file, line = _caller()
    if not _comparator.check_memory_not_equal(file, line, a, b, length):
        _fail("assert_mem_ne", file, line)


def assert_exception(function: Callable[[], Any]) -> None:
    """Assert that calling function raises any exception."""
    file, line = _caller()
    if not _comparator.check_exception(file, line, function):
        _fail("assert_exception", file, line)


def assert_exception_type(
    function: Callable[[], Any],
    expected: ExpectedException,
    name: Optional[str] = None
) -> None:
    """
    Assert that calling function raises an error of the expected type.

    expected is an exception class or a kind name. Whether an ancestor
    class or kind also matches depends on the exception_match setting.
    """
    file, line = _caller()
    if not _comparator.check_exception_type(file, line, function, expected, name):
        _fail("assert_exception_type", file, line)
