"""
Unit tests for the assertion functions
"""

import io

import pytest

import stf
from stf.assertions import get_comparator, set_comparator
from stf.comparator import Comparator
from stf.exceptions import AssertionFailure
from stf.models import ErrorCode
from stf.output import ConsoleReporter
from stf.printer import ValuePrinter
from stf.state import FAILURE_SIGNAL


@pytest.fixture
def stream():
    stream = io.StringIO()
    set_comparator(Comparator(ValuePrinter(ConsoleReporter(stream))))
    return stream


class TestPassingAssertions:
    """Passing assertions return quietly and leave the signal clear."""

    def test_all_kinds(self, stream):
        stf.assert_eq(1, 1)
        stf.assert_ne(1, 2)
        stf.assert_gt(2, 1)
        stf.assert_ge(2, 2)
        stf.assert_lt(1, 2)
        stf.assert_le(1, 1)
        stf.assert_true(True)
        stf.assert_false(False)
        stf.assert_close(1.0, 1.05, 0.1)
        stf.assert_mem_eq(b"ab", b"ab", 2)
        stf.assert_mem_ne(b"ab", b"ac", 2)
        stf.assert_exception(lambda: 1 / 0)
        stf.assert_exception_type(lambda: 1 / 0, ZeroDivisionError)
        stf.assert_exception_type(lambda: 1 / 0, ArithmeticError)

        assert not FAILURE_SIGNAL.is_set()
        assert stream.getvalue() == ""


class TestFailingAssertions:
    """Failing assertions report, set the signal and end the body."""

    def test_failure_sets_signal_and_raises(self, stream):
        with pytest.raises(AssertionFailure) as excinfo:
            stf.assert_eq(1, 2)

        assert FAILURE_SIGNAL.is_set()
        assert excinfo.value.error_code == ErrorCode.ASSERTION_FAILURE
        assert excinfo.value.file == __file__

    def test_reports_caller_location(self, stream):
        with pytest.raises(AssertionFailure) as excinfo:
            stf.assert_true(False)
        line = excinfo.value.line

        assert stream.getvalue() == f"\nAssertion failed at {__file__}:{line}\n"
        assert excinfo.value.to_error_context().context == {"file": __file__, "line": line}

    def test_statements_after_failure_do_not_run(self, stream):
        reached = []

        def body():
            stf.assert_eq(1, 2)
            reached.append(True)

        with pytest.raises(AssertionFailure):
            body()
        assert reached == []

    def test_finally_clauses_still_run(self, stream):
        released = []

        def body():
            try:
                stf.assert_lt(2, 1)
            finally:
                released.append(True)

        with pytest.raises(AssertionFailure):
            body()
        assert released == [True]


class TestComparatorInstallation:
    """Test swapping the active comparator."""

    def test_set_comparator_returns_previous(self):
        replacement = Comparator()
        previous = set_comparator(replacement)
        try:
            assert get_comparator() is replacement
        finally:
            set_comparator(previous)


class TestExitExceptions:
    """assert_exception_type handles SystemExit raised by the function."""

    def test_system_exit(self, stream):
        def exits():
            raise SystemExit(2)

        stf.assert_exception_type(exits, SystemExit)
        assert not FAILURE_SIGNAL.is_set()
