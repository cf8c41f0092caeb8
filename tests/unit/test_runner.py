"""
Unit tests for the supervised test runner
"""

import io
import threading

import pytest
from unittest.mock import patch

import stf
from stf.assertions import set_comparator
from stf.comparator import Comparator
from stf.config import HarnessConfig
from stf.models import ErrorCode, TestCase
from stf.output import ConsoleReporter
from stf.printer import ValuePrinter
from stf.registry import TestRegistry
from stf.runner import TestRunner
from stf.state import FailureSignal
from stf.utils.constants import EXIT_FAILURE, EXIT_HARNESS_ERROR, EXIT_SUCCESS, WATCHDOG_GRACE


def passing():
    pass


@pytest.fixture
def stream():
    stream = io.StringIO()
    set_comparator(Comparator(ValuePrinter(ConsoleReporter(stream))))
    return stream


@pytest.fixture
def signal():
    return FailureSignal()


def make_runner(registry, stream, signal, terminate=None, **config):
    kwargs = {}
    if terminate is not None:
        kwargs["terminate"] = terminate
    return TestRunner(
        registry,
        HarnessConfig(**config),
        ConsoleReporter(stream),
        signal=signal,
        **kwargs
    )


class TestPreconditions:
    """Test checks made before any test runs."""

    def test_no_tests(self, stream, signal):
        summary = make_runner(TestRegistry(), stream, signal).run()
        assert summary.exit_code == EXIT_HARNESS_ERROR
        assert stream.getvalue() == "Error: there are no registered tests\n"

    def test_registration_failures_abort_before_running(self, stream, signal):
        ran = []
        registry = TestRegistry()
        registry.register("A::one", lambda: ran.append(True))
        registry.register("A::bad", passing, timeout=0)

        summary = make_runner(registry, stream, signal).run()

        assert summary.exit_code == EXIT_HARNESS_ERROR
        assert ran == []
        assert stream.getvalue() == "Error: 1 tests failed to register or get excluded\n"

    def test_registration_errors_are_logged(self, stream, signal, caplog):
        registry = TestRegistry()
        registry.register("A::bad", passing, timeout=0)

        with caplog.at_level("ERROR", logger="stf.runner"):
            make_runner(registry, stream, signal).run()

        assert "REGISTRATION_ERROR: Failed to register test 'A::bad'" in caplog.text

    def test_duplicates_allowed_by_default(self, stream, signal):
        registry = TestRegistry()
        registry.register("A::one", passing)
        registry.register("A::one", passing)

        summary = make_runner(registry, stream, signal).run()

        assert summary.exit_code == EXIT_SUCCESS
        assert [name for name, _ in summary.executed] == ["A::one", "A::one"]

    def test_duplicates_rejected_under_error_policy(self, stream, signal):
        registry = TestRegistry()
        registry.register("A::one", passing)
        registry.register("A::one", passing)

        summary = make_runner(registry, stream, signal, duplicate_names="error").run()

        assert summary.exit_code == EXIT_HARNESS_ERROR
        assert "duplicate test names registered: A::one" in stream.getvalue()


class TestRun:
    """Test sequential execution and reporting."""

    def test_all_pass(self, stream, signal):
        order = []
        registry = TestRegistry()
        registry.register("A::one", lambda: order.append(1))
        registry.register("A::two", lambda: order.append(2))

        summary = make_runner(registry, stream, signal).run()

        assert summary.success
        assert order == [1, 2]
        lines = stream.getvalue().splitlines()
        assert lines[0] == "Total numbers of tests: 2"
        assert lines[1].startswith("Running test A::one (")
        assert lines[2].startswith("Running test A::two (")
        assert lines[3].startswith("All test(s) passed successfully (")
        assert lines[3].endswith(" total)")

    def test_total_is_sum_of_durations(self, stream, signal):
        registry = TestRegistry()
        for name in ("A::one", "A::two", "A::three"):
            registry.register(name, passing)

        summary = make_runner(registry, stream, signal).run()

        assert summary.total_duration_ns == sum(d for _, d in summary.executed)

    def test_excluded_tests_do_not_run(self, stream, signal):
        ran = []
        registry = TestRegistry()
        registry.register("Miscellaneous::TestToRun", lambda: ran.append("run"))
        registry.register("Miscellaneous::TestToExclude", lambda: ran.append("excluded"))
        registry.exclude("Miscellaneous::TestToExclude")

        summary = make_runner(registry, stream, signal).run()

        assert summary.success
        assert ran == ["run"]
        assert summary.excluded == ["Miscellaneous::TestToExclude"]
        assert "Excluding test Miscellaneous::TestToExclude\n" in stream.getvalue()

    def test_count_includes_excluded(self, stream, signal):
        registry = TestRegistry()
        registry.register("A::one", passing)
        registry.register("A::two", passing)
        registry.exclude("A::two")

        make_runner(registry, stream, signal).run()

        assert stream.getvalue().startswith("Total numbers of tests: 2\n")

    def test_first_failure_stops_the_run(self, stream, signal, monkeypatch):
        monkeypatch.setattr("stf.assertions.FAILURE_SIGNAL", signal)
        ran = []
        registry = TestRegistry()
        registry.register("A::fails", lambda: stf.assert_eq(1, 2))
        registry.register("A::after", lambda: ran.append(True))

        summary = make_runner(registry, stream, signal).run()

        assert summary.exit_code == EXIT_FAILURE
        assert summary.failed_test == "A::fails"
        assert ran == []
        assert "Assertion failed at" in stream.getvalue()
        assert "All test(s) passed" not in stream.getvalue()

    def test_unexpected_exception(self, stream, signal):
        def body():
            raise ValueError("boom")

        registry = TestRegistry()
        registry.register("A::raises", body)

        summary = make_runner(registry, stream, signal).run()

        assert summary.exit_code == EXIT_FAILURE
        assert signal.is_set()
        assert "\nUnexpected exception thrown: ValueError: boom\n" in stream.getvalue()

    def test_system_exit_stays_in_worker(self, stream, signal):
        def body():
            raise SystemExit(3)

        registry = TestRegistry()
        registry.register("A::exits", body)

        summary = make_runner(registry, stream, signal).run()

        assert summary.exit_code == EXIT_FAILURE

    def test_preexisting_signal_fails_the_first_test(self, stream, signal):
        signal.set()
        registry = TestRegistry()
        registry.register("A::one", passing)

        summary = make_runner(registry, stream, signal).run()

        assert summary.exit_code == EXIT_FAILURE


class TestRunTest:
    """Test single test execution."""

    def test_outcome_for_unexpected_exception(self, stream, signal):
        def body():
            raise KeyError("k")

        runner = make_runner(TestRegistry(), stream, signal)
        outcome = runner.run_test(TestCase(name="A::one", body=body))

        assert outcome.failed
        assert outcome.error.code == ErrorCode.UNEXPECTED_EXCEPTION
        assert outcome.error.subtype == "KeyError"
        assert outcome.duration_ns >= 0

    def test_effective_timeout(self, stream, signal):
        runner = make_runner(TestRegistry(), stream, signal, default_timeout=30)
        assert runner.effective_timeout(TestCase(name="A::one", body=passing)) == 30
        assert runner.effective_timeout(TestCase(name="A::one", body=passing, timeout=2)) == 2

    def test_timeout_terminates(self, stream, signal, fake_terminate):
        release = threading.Event()
        registry = TestRegistry()
        registry.register("Slow::Hang", lambda: release.wait(10), timeout=1)
        registry.register("Slow::Never", passing)

        try:
            summary = make_runner(registry, stream, signal, terminate=fake_terminate).run()
        finally:
            release.set()

        assert fake_terminate.calls == [EXIT_FAILURE]
        assert summary.exit_code == EXIT_FAILURE
        assert summary.failed_test == "Slow::Hang"
        assert 'Test "Slow::Hang" exceeded 1 second timeout; terminating\n' in stream.getvalue()
        assert "Slow::Never" not in stream.getvalue()


class TestHardWatchdog:
    """Test the interpreter-level watchdog around each test."""

    def test_armed_past_timeout_and_cancelled(self, stream, signal):
        runner = make_runner(TestRegistry(), stream, signal)
        with patch("stf.runner.faulthandler") as watchdog:
            runner.run_test(TestCase(name="A::one", body=passing, timeout=7))

        watchdog.dump_traceback_later.assert_called_once()
        args, kwargs = watchdog.dump_traceback_later.call_args
        assert args[0] == 7 + WATCHDOG_GRACE
        assert kwargs["exit"] is True
        watchdog.cancel_dump_traceback_later.assert_called_once_with()

    def test_cancelled_when_terminate_returns(self, stream, signal, fake_terminate):
        release = threading.Event()
        runner = make_runner(TestRegistry(), stream, signal, terminate=fake_terminate)
        try:
            with patch("stf.runner.faulthandler") as watchdog:
                outcome = runner.run_test(TestCase(name="A::hang", body=lambda: release.wait(10), timeout=1))
        finally:
            release.set()

        assert outcome.timed_out
        watchdog.cancel_dump_traceback_later.assert_called_once_with()

    def test_not_armed_without_stderr(self, stream, signal, monkeypatch):
        monkeypatch.setattr("stf.runner.sys.__stderr__", None)
        runner = make_runner(TestRegistry(), stream, signal)
        with patch("stf.runner.faulthandler") as watchdog:
            outcome = runner.run_test(TestCase(name="A::one", body=passing))

        assert not outcome.failed
        watchdog.dump_traceback_later.assert_not_called()
        watchdog.cancel_dump_traceback_later.assert_not_called()
