"""
Test registry for the Simple Test Framework.

The registry is filled during a single-threaded build phase (module import
of the test files) and is only read once the runner starts. Registration
problems never raise: they are counted in failed_registrations and the
runner refuses to start while that count is non-zero.
"""

from collections import Counter
from typing import Callable, Iterator, List, Optional, TypeVar
import logging

from pydantic import ValidationError

from .models import ErrorCode, ErrorContext, TestCase
from .utils.constants import QUALIFIED_NAME_SEPARATOR

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[[], None])


def qualified_name(group: str, name: str) -> str:
    """Build the "group::test" name a test is registered under."""
    return f"{group}{QUALIFIED_NAME_SEPARATOR}{name}"


class TestRegistry:
    """Ordered collection of tests plus the names to exclude."""

    __test__ = False

    def __init__(self):
        self.failed_registrations = 0
        self.registration_errors: List[ErrorContext] = []
        self._tests: Optional[List[TestCase]] = None
        self._exclusions: Optional[List[str]] = None

    @property
    def tests(self) -> List[TestCase]:
        return list(self._tests or [])

    @property
    def exclusions(self) -> List[str]:
        return list(self._exclusions or [])

    def __len__(self) -> int:
        return len(self._tests or [])

    def __iter__(self) -> Iterator[TestCase]:
        return iter(self._tests or [])

    def register(self, name: str, body: Callable[[], None], timeout: Optional[int] = None) -> int:
        """
        Register a test.

        Args:
            name: Qualified test name ("group::test")
            body: Zero-argument callable
            timeout: Seconds after which the test is considered hung; None
                uses the harness default_timeout

        Returns:
            1-based identifier of the test, or 0 if it could not be registered
        """
        try:
            if self._tests is None:
                self._tests = []
            self._tests.append(TestCase(
                name=name,
                body=body,
                timeout=timeout
            ))
        except (ValidationError, MemoryError) as e:
            self._record_failure("register", name, e)
            return 0

        logger.debug(f"Registered test {name}")
        return len(self._tests)

    def exclude(self, name: str) -> bool:
        """
        Record a qualified test name to skip.

        Returns:
            True if the exclusion was recorded
        """
        try:
            if self._exclusions is None:
                self._exclusions = []
            self._exclusions.append(str(name))
        except MemoryError as e:
            self._record_failure("exclude", name, e)
            return False

        logger.debug(f"Excluded test {name}")
        return True

    def _record_failure(self, action: str, name: str, error: BaseException) -> None:
        self.failed_registrations += 1
        self.registration_errors.append(ErrorContext(
            code=ErrorCode.REGISTRATION_ERROR,
            subtype=action,
            message=f"Failed to {action} test {name!r}: {error}",
            context={"name": name, "error_type": type(error).__name__}
        ))
        logger.warning(self.registration_errors[-1].message)

    def is_excluded(self, name: str) -> bool:
        """Exact, case-sensitive match against the exclusion list."""
        return name in (self._exclusions or ())

    def test(self, group: str, name: str, timeout: Optional[int] = None) -> Callable[[F], F]:
        """
        Decorator registering a function as group::name.

            @registry.test("Integrals", "Equal")
            def _():
                assert_eq(1, 1)
        """
        def decorator(body: F) -> F:
            self.register(qualified_name(group, name), body, timeout)
            return body
        return decorator

    def exclude_test(self, group: str, name: str) -> bool:
        return self.exclude(qualified_name(group, name))

    def duplicate_names(self) -> List[str]:
        """Non-excluded qualified names registered more than once."""
        counts = Counter(
            test.name for test in self._tests or []
            if not self.is_excluded(test.name)
        )
        return [name for name, count in counts.items() if count > 1]
