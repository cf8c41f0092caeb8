"""
Constants and enums for the Simple Test Framework.

This module provides named constants and enums to replace magic values
throughout the codebase.
"""

from enum import Enum


# Timeout constants (in seconds)
DEFAULT_TIMEOUT = 600
MAX_TIMEOUT = 86400
# Extra seconds before the interpreter-level watchdog kills a stuck test
WATCHDOG_GRACE = 5

# Printing constants
DEFAULT_FLOAT_PRECISION = 26
QUALIFIED_NAME_SEPARATOR = "::"

# Labels used when printing failing values
EXPECT_TEXT = "  expected: "
ACTUAL_TEXT = "    actual: "
LHS_TEXT = "  lhs: "
RHS_TEXT = "  rhs: "

# Process exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_HARNESS_ERROR = 2

# Environment variables
CONFIG_ENV_VAR = "STF_CONFIG"


class ExceptionMatch(str, Enum):
    """How assert_exception_type matches a raised error."""
    ANCESTOR = "ancestor"
    EXACT = "exact"


class DuplicatePolicy(str, Enum):
    """What the runner does with duplicate qualified names."""
    ALLOW = "allow"
    WARN = "warn"
    ERROR = "error"


class ValueCategory(str, Enum):
    """Dispatch categories used by the value printer."""
    BOOLEAN = "boolean"
    CHARACTER = "character"
    INTEGRAL = "integral"
    FLOATING_POINT = "floating_point"
    POINTER_OR_ARRAY = "pointer_or_array"
    FORMATTED = "formatted"
    PRINTABLE = "printable"
    OPAQUE = "opaque"
