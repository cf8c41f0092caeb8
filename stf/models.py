"""
Data models for the Simple Test Framework.

TestCase is a validated, immutable pydantic model; the per-run records are
plain dataclasses that are produced and consumed within a single run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils.constants import EXIT_SUCCESS, MAX_TIMEOUT


class ErrorCode(Enum):
    """Error codes for harness and test failures."""
    REGISTRATION_ERROR = "REGISTRATION_ERROR"        # Test or exclusion could not be recorded
    ASSERTION_FAILURE = "ASSERTION_FAILURE"          # An assertion in a test body failed
    UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"    # Error escaped a test body
    TIMEOUT = "TIMEOUT"                              # Exceeded wall clock budget
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"      # Invalid harness configuration


@dataclass
class ErrorContext:
    """Structured error context for debugging."""
    code: ErrorCode
    subtype: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "code": self.code.value,
            "subtype": self.subtype,
            "message": self.message,
            "context": self.context or {}
        }


class TestCase(BaseModel):
    """A registered test: qualified name, body and timeout."""
    model_config = ConfigDict(frozen=True)

    __test__ = False

    name: str
    body: Callable[[], Any]
    # None means the harness default_timeout applies
    timeout: Optional[int] = Field(None, ge=1, le=MAX_TIMEOUT)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate qualified test name."""
        if not v:
            raise ValueError("Test name cannot be empty")
        return v


@dataclass
class ExecutionOutcome:
    """Result of executing one test; discarded once reported."""
    name: str
    started: Optional[int] = None    # time.perf_counter_ns()
    finished: Optional[int] = None
    failed: bool = False
    timed_out: bool = False
    error: Optional[ErrorContext] = None

    @property
    def duration_ns(self) -> int:
        if self.started is None or self.finished is None:
            return 0
        return self.finished - self.started


@dataclass
class RunSummary:
    """What a run did, and the exit status it maps to."""
    exit_code: int = EXIT_SUCCESS
    executed: List[Tuple[str, int]] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)
    total_duration_ns: int = 0
    failed_test: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.exit_code == EXIT_SUCCESS
