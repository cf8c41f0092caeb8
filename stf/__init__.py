"""
Simple Test Framework.

Register named test functions, then call main() to run them one at a time
under a per-test timeout with readable failure diagnostics.
"""

from .assertions import (
    assert_eq, assert_ne, assert_gt, assert_ge, assert_lt, assert_le,
    assert_true, assert_false, assert_close, assert_mem_eq, assert_mem_ne,
    assert_exception, assert_exception_type
)
from .comparator import Comparator
from .config import HarnessConfig
from .exceptions import (
    StfError, ConfigurationError, AssertionFailure,
    TestTimeoutError, TaggedError, error_kinds
)
from .harness import default_registry, test, register, exclude, run, main
from .models import TestCase, ExecutionOutcome, RunSummary, ErrorCode, ErrorContext
from .printer import ValuePrinter
from .registry import TestRegistry, qualified_name
from .runner import TestRunner
from .state import FAILURE_SIGNAL, FailureSignal

__version__ = "1.0.0"

__all__ = [
    "assert_eq", "assert_ne", "assert_gt", "assert_ge", "assert_lt", "assert_le",
    "assert_true", "assert_false", "assert_close", "assert_mem_eq", "assert_mem_ne",
    "assert_exception", "assert_exception_type",
    "Comparator",
    "HarnessConfig",
    "StfError", "ConfigurationError", "AssertionFailure",
    "TestTimeoutError", "TaggedError", "error_kinds",
    "default_registry", "test", "register", "exclude", "run", "main",
    "TestCase", "ExecutionOutcome", "RunSummary", "ErrorCode", "ErrorContext",
    "ValuePrinter",
    "TestRegistry", "qualified_name",
    "TestRunner",
    "FAILURE_SIGNAL", "FailureSignal",
]
