"""
Test runner for the Simple Test Framework.

This module handles supervised test execution: each test body runs on a
worker thread while the runner waits with the test's timeout. Tests run one
at a time in registration order and the first failure ends the run.

A worker that exceeds its timeout cannot be stopped, so the runner reports
the test and terminates the whole process. The abandoned worker thread is
a daemon and dies with it.

The runner can only notice a timeout when it gets the GIL back. A body stuck
in C code that never releases it (regex backtracking, huge integer
arithmetic, some extensions) would starve it forever, so every test is also
covered by faulthandler's C-level watchdog, armed WATCHDOG_GRACE seconds past
the timeout. It dumps all thread tracebacks to stderr and exits with status 1.
"""

import faulthandler
import os
import sys
import threading
import time
from typing import Callable, Optional
import logging

from .config import HarnessConfig
from .exceptions import AssertionFailure, TestTimeoutError, describe_exception
from .models import ErrorCode, ErrorContext, ExecutionOutcome, RunSummary, TestCase
from .output import ConsoleReporter
from .registry import TestRegistry
from .state import FAILURE_SIGNAL, FailureSignal
from .utils.constants import (
    EXIT_FAILURE, EXIT_HARNESS_ERROR, EXIT_SUCCESS, WATCHDOG_GRACE, DuplicatePolicy
)

logger = logging.getLogger(__name__)


class TestRunner:
    """Runs the tests of a registry under a per-test watchdog."""

    __test__ = False

    def __init__(
        self,
        registry: TestRegistry,
        config: Optional[HarnessConfig] = None,
        reporter: Optional[ConsoleReporter] = None,
        signal: Optional[FailureSignal] = None,
        terminate: Callable[[int], None] = os._exit
    ):
        """
        Initialize test runner.

        Args:
            registry: Tests and exclusions to run
            config: Validated configuration
            reporter: Console reporter for progress and results
            signal: Failure signal to observe (defaults to the process-wide one)
            terminate: Called with the exit status when a test times out;
                must not return in production use
        """
        self.registry = registry
        self.config = config or HarnessConfig()
        self.reporter = reporter or ConsoleReporter()
        self.signal = signal if signal is not None else FAILURE_SIGNAL
        self._terminate = terminate

    def effective_timeout(self, test: TestCase) -> int:
        if test.timeout is not None:
            return test.timeout
        return self.config.default_timeout

    def check_preconditions(self) -> Optional[int]:
        """
        Validate the registry before anything runs.

        Returns:
            An exit status if the run must not start, None otherwise
        """
        if len(self.registry) == 0:
            self.reporter.no_tests()
            return EXIT_HARNESS_ERROR

        if self.registry.failed_registrations:
            for error in self.registry.registration_errors:
                logger.error(f"{error.code.value}: {error.message}")
            self.reporter.registration_failures(self.registry.failed_registrations)
            return EXIT_HARNESS_ERROR

        duplicates = self.registry.duplicate_names()
        if duplicates:
            policy = self.config.duplicate_names
            if policy is DuplicatePolicy.ERROR:
                self.reporter.duplicate_names(duplicates)
                return EXIT_HARNESS_ERROR
            if policy is DuplicatePolicy.WARN:
                logger.warning(f"Duplicate test names will run more than once: {', '.join(duplicates)}")

        return None

    def run(self) -> RunSummary:
        """
        Run every non-excluded test in registration order.

        Returns:
            RunSummary with the exit status and per-test timing
        """
        summary = RunSummary()

        status = self.check_preconditions()
        if status is not None:
            summary.exit_code = status
            return summary

        self.reporter.test_count(len(self.registry))
        logger.info(f"Running {len(self.registry)} tests "
                    f"({len(self.registry.exclusions)} exclusions)")

        for test in self.registry:
            if self.registry.is_excluded(test.name):
                self.reporter.excluding(test.name)
                summary.excluded.append(test.name)
                continue

            outcome = self.run_test(test)

            if outcome.timed_out or self.signal.is_set():
                summary.exit_code = EXIT_FAILURE
                summary.failed_test = test.name
                logger.info(f"Stopping run after failure in {test.name}")
                return summary

            self.reporter.test_duration(outcome.duration_ns)
            summary.executed.append((test.name, outcome.duration_ns))
            summary.total_duration_ns += outcome.duration_ns

        self.reporter.all_passed(summary.total_duration_ns)
        summary.exit_code = EXIT_SUCCESS
        return summary

    def run_test(self, test: TestCase) -> ExecutionOutcome:
        """
        Execute one test on a worker thread and wait for it.

        Returns:
            ExecutionOutcome for the test; timed_out is set only if the
            terminate function returned
        """
        outcome = ExecutionOutcome(name=test.name)
        done = threading.Event()
        timeout = self.effective_timeout(test)

        self.reporter.running(test.name)

        worker = threading.Thread(
            target=self._execute,
            args=(test, outcome, done),
            name=f"stf-worker-{test.name}",
            daemon=True
        )
        armed = self._arm_watchdog(timeout)
        try:
            worker.start()
            logger.debug(f"Started worker for {test.name} with {timeout}s timeout")

            if not done.wait(timeout):
                outcome.timed_out = True
                self._on_timeout(test, timeout, outcome)
                return outcome
        finally:
            if armed:
                faulthandler.cancel_dump_traceback_later()

        worker.join()
        logger.debug(f"Worker for {test.name} finished (failed={outcome.failed})")
        return outcome

    def _arm_watchdog(self, timeout: int) -> bool:
        """Arm the GIL-independent watchdog; False if there is no stderr to report on."""
        stream = sys.__stderr__
        if stream is None:
            logger.warning("No stderr available, GIL-holding tests cannot be timed out")
            return False
        faulthandler.dump_traceback_later(timeout + WATCHDOG_GRACE, exit=True, file=stream)
        return True

    def _execute(self, test: TestCase, outcome: ExecutionOutcome, done: threading.Event) -> None:
        """Worker body: run the test, convert anything it raises into a failure."""
        outcome.started = time.perf_counter_ns()
        try:
            test.body()
        except AssertionFailure as e:
            outcome.failed = True
            outcome.error = e.to_error_context()
            self.signal.set()
        # Everything, including SystemExit, must stay on this side of the worker
        except BaseException as e:
            self.reporter.unexpected_exception(describe_exception(e))
            outcome.failed = True
            outcome.error = ErrorContext(
                code=ErrorCode.UNEXPECTED_EXCEPTION,
                subtype=type(e).__name__,
                message=str(e)
            )
            self.signal.set()
        finally:
            outcome.finished = time.perf_counter_ns()
            done.set()

    def _on_timeout(self, test: TestCase, timeout: int, outcome: ExecutionOutcome) -> None:
        error = TestTimeoutError(test.name, timeout)
        outcome.error = error.to_error_context()
        self.reporter.timeout(error.message)
        self.reporter.flush()
        logger.error(f"Terminating: {error}")
        self._terminate(EXIT_FAILURE)
