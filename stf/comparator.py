"""
Value comparison for the Simple Test Framework.

Each check_* method implements the contract behind one assertion kind: it
returns True when the condition holds, otherwise prints the failure banner
and the labeled values and returns False. Setting the failure signal and
leaving the test body is left to the caller (see stf.assertions).
"""

from typing import Any, Callable, Optional, Type, Union

import numpy as np
import logging

from .config import HarnessConfig
from .exceptions import describe_exception, error_kinds
from .output import ConsoleReporter
from .printer import ValuePrinter
from .utils.constants import (
    ACTUAL_TEXT, EXPECT_TEXT, LHS_TEXT, RHS_TEXT, ExceptionMatch
)

logger = logging.getLogger(__name__)

ExpectedException = Union[Type[BaseException], str]


def _holds(result: Any, reduce: Callable = np.all) -> bool:
    """Truth of a comparison result; element-wise results are reduced."""
    if isinstance(result, np.ndarray):
        return bool(reduce(result))
    return bool(result)


def _octets(buffer: Any, length: int) -> memoryview:
    """Byte view over the first length octets of a buffer-protocol object."""
    if length < 0:
        raise ValueError(f"Length cannot be negative: {length}")
    view = memoryview(buffer)
    if view.format not in ("B", "b", "c") or not view.c_contiguous or view.ndim != 1:
        view = memoryview(view.tobytes())
    view = view.cast("B")
    if length > view.nbytes:
        raise ValueError(f"Length {length} exceeds buffer size of {view.nbytes} octets")
    return view[:length]


def memory_hex(octets: memoryview) -> str:
    """Hex dump of a byte view, e.g. "0x01 02 0a"."""
    return "0x" + " ".join(f"{b:02x}" for b in octets)


def _first_mismatch(left: memoryview, right: memoryview) -> Optional[int]:
    for index in range(len(left)):
        if left[index] != right[index]:
            return index
    return None


def _validate_expected(expected: Any) -> None:
    if isinstance(expected, str):
        return
    if isinstance(expected, type) and issubclass(expected, BaseException):
        return
    raise TypeError(f"Expected an exception type or kind name, got {expected!r}")


class Comparator:
    """Implements the assertion contracts and failure diagnostics."""

    def __init__(
        self,
        printer: Optional[ValuePrinter] = None,
        exception_match: ExceptionMatch = ExceptionMatch.ANCESTOR
    ):
        """
        Initialize comparator.

        Args:
            printer: Value printer used for failure output
            exception_match: Matching policy for check_exception_type()
        """
        self.printer = printer or ValuePrinter()
        self.exception_match = ExceptionMatch(exception_match)

    @classmethod
    def from_config(
        cls,
        config: HarnessConfig,
        reporter: Optional[ConsoleReporter] = None
    ) -> "Comparator":
        """Build a comparator (and its printer) from harness configuration."""
        printer = ValuePrinter(reporter, float_precision=config.float_precision)
        if config.hex_adapters:
            from .adapters import install_hex_adapters
            install_hex_adapters(printer)
        return cls(printer, exception_match=config.exception_match)

    @property
    def reporter(self) -> ConsoleReporter:
        return self.printer.reporter

    def expect_fail(self, file: str, line: int, expected: Any, actual: Any) -> None:
        self.reporter.assertion_failed(file, line)
        self.printer.print_value(EXPECT_TEXT, expected)
        self.printer.print_value(ACTUAL_TEXT, actual)

    def lhs_rhs_fail(self, file: str, line: int, lhs: Any, rhs: Any) -> None:
        self.reporter.assertion_failed(file, line)
        self.printer.print_value(LHS_TEXT, lhs)
        self.printer.print_value(RHS_TEXT, rhs)

    def check_equal(self, file: str, line: int, expected: Any, actual: Any) -> bool:
        if _holds(expected == actual):
            return True
        self.expect_fail(file, line, expected, actual)
        return False

    def check_not_equal(self, file: str, line: int, lhs: Any, rhs: Any) -> bool:
        if _holds(lhs != rhs, np.any):
            return True
        self.lhs_rhs_fail(file, line, lhs, rhs)
        return False

    def check_greater(self, file: str, line: int, lhs: Any, rhs: Any) -> bool:
        if _holds(lhs > rhs):
            return True
        self.lhs_rhs_fail(file, line, lhs, rhs)
        return False

    def check_greater_equal(self, file: str, line: int, lhs: Any, rhs: Any) -> bool:
        if _holds(lhs >= rhs):
            return True
        self.lhs_rhs_fail(file, line, lhs, rhs)
        return False

    def check_less(self, file: str, line: int, lhs: Any, rhs: Any) -> bool:
        if _holds(lhs < rhs):
            return True
        self.lhs_rhs_fail(file, line, lhs, rhs)
        return False

    def check_less_equal(self, file: str, line: int, lhs: Any, rhs: Any) -> bool:
        if _holds(lhs <= rhs):
            return True
        self.lhs_rhs_fail(file, line, lhs, rhs)
        return False

    def check_boolean(self, file: str, line: int, value: Any, expected: bool = True) -> bool:
        if _holds(value) == expected:
            return True
        self.reporter.assertion_failed(file, line)
        return False

    def check_close(self, file: str, line: int, lhs: Any, rhs: Any, epsilon: Any) -> bool:
        """
        Test that abs(lhs - rhs) < epsilon.

        The arithmetic is done in the operands' own floating point type:
        numpy float32 stays single precision, longdouble stays extended and
        Python floats are double precision.
        """
        dtype = np.result_type(lhs, rhs, epsilon)
        if not np.issubdtype(dtype, np.floating):
            dtype = np.dtype(np.float64)

        left = dtype.type(lhs)
        right = dtype.type(rhs)
        with np.errstate(over="ignore", invalid="ignore"):
            close = bool(np.abs(left - right) < dtype.type(epsilon))

        if close:
            return True
        self.lhs_rhs_fail(file, line, left, right)
        return False

    def check_memory_equal(self, file: str, line: int, expected: Any, actual: Any, length: int) -> bool:
        """Test that the first length octets of two buffers are identical."""
        left = _octets(expected, length)
        right = _octets(actual, length)

        if _first_mismatch(left, right) is None:
            return True

        self.reporter.assertion_failed(file, line)
        self.printer.print_text(EXPECT_TEXT, memory_hex(left))
        self.printer.print_text(ACTUAL_TEXT, memory_hex(right))
        return False

    def check_memory_not_equal(self, file: str, line: int, lhs: Any, rhs: Any, length: int) -> bool:
        """Test that the first length octets of two buffers differ somewhere."""
        left = _octets(lhs, length)
        right = _octets(rhs, length)

        if _first_mismatch(left, right) is not None:
            return True

        self.reporter.assertion_failed(file, line)
        self.printer.print_text(LHS_TEXT, memory_hex(left))
        self.printer.print_text(RHS_TEXT, memory_hex(right))
        return False

    def check_exception(self, file: str, line: int, function: Callable[[], Any]) -> bool:
        """Test that calling function raises anything derived from BaseException."""
        try:
            function()
        except BaseException as e:
            logger.debug(f"Expected exception caught: {describe_exception(e)}")
            return True

        self.reporter.assertion_failed(file, line)
        self.printer.print_text(EXPECT_TEXT, "any exception thrown")
        self.printer.print_text(ACTUAL_TEXT, "no exception thrown")
        return False

    def matches(self, error: BaseException, expected: ExpectedException) -> bool:
        """
        True if error satisfies expected under the configured policy.

        Args:
            error: The raised error
            expected: An exception class or a kind name (see error_kinds)
        """
        _validate_expected(expected)

        if isinstance(expected, str):
            kinds = error_kinds(error)
            if self.exception_match is ExceptionMatch.EXACT:
                return kinds[0] == expected
            return expected in kinds

        if self.exception_match is ExceptionMatch.EXACT:
            return type(error) is expected
        return isinstance(error, expected)

    def check_exception_type(
        self,
        file: str,
        line: int,
        function: Callable[[], Any],
        expected: ExpectedException,
        name: Optional[str] = None
    ) -> bool:
        """Test that calling function raises an error matching expected."""
        _validate_expected(expected)

        raised: Optional[BaseException] = None
        try:
            function()
        except BaseException as e:
            raised = e

        if raised is not None and self.matches(raised, expected):
            return True

        if name is None:
            name = expected if isinstance(expected, str) else expected.__name__

        self.reporter.assertion_failed(file, line)
        self.printer.print_text(EXPECT_TEXT, f"exception of type {name}")
        if raised is not None:
            self.printer.print_text(
                ACTUAL_TEXT, f"some other exception thrown ({describe_exception(raised)})"
            )
        else:
            self.printer.print_text(ACTUAL_TEXT, "no exception thrown")
        return False
