"""
Exceptions raised by the Simple Test Framework.

Framework errors carry an ErrorCode plus structured context so that they
can be recorded on an ExecutionOutcome as an ErrorContext.
"""

from typing import Optional, Dict, Any, Tuple
from .models import ErrorCode, ErrorContext


class StfError(Exception):
    """Base class for framework errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[ErrorCode] = None,
        subtype: str = "generic",
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.subtype = subtype
        self.context = dict(context or {})

    def to_error_context(self) -> Optional[ErrorContext]:
        """ErrorContext for this error, or None for uncoded errors."""
        if self.error_code is None:
            return None
        return ErrorContext(self.error_code, self.subtype, self.message, self.context)

    def __str__(self) -> str:
        if self.error_code is None:
            return self.message
        return f"[{self.error_code.value}] {self.message}"


class ConfigurationError(StfError):
    """The harness configuration could not be loaded or validated."""

    def __init__(self, message: str, config_path: Optional[str] = None, field: Optional[str] = None):
        context = {
            key: value
            for key, value in (("config_path", config_path), ("field", field))
            if value
        }
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, "configuration", context)
        self.config_path = config_path
        self.field = field


class AssertionFailure(StfError):
    """
    Raised by a failing assertion to end the current test body.

    The diagnostic has already been printed when this is raised, so the
    worker only records the failure.
    """

    def __init__(self, message: str, file: Optional[str] = None, line: Optional[int] = None):
        context = {}
        if file:
            context["file"] = file
        if line is not None:
            context["line"] = line

        super().__init__(
            message,
            error_code=ErrorCode.ASSERTION_FAILURE,
            subtype="assertion",
            context=context
        )
        self.file = file
        self.line = line


class TestTimeoutError(StfError):
    """Describes a test that exceeded its wall-clock budget."""

    __test__ = False

    def __init__(self, test_name: str, timeout_seconds: int):
        super().__init__(
            f'Test "{test_name}" exceeded {timeout_seconds} second timeout; terminating',
            error_code=ErrorCode.TIMEOUT,
            subtype="wall_clock",
            context={"test_name": test_name, "timeout_seconds": timeout_seconds}
        )
        self.test_name = test_name
        self.timeout_seconds = timeout_seconds


class TaggedError(Exception):
    """
    Error carrying an explicit kind and the kinds it "is-a".

    assert_exception_type() matches kind names against error_kinds(), so a
    subclass can declare membership without relying on class inheritance:

        class ChecksumError(TaggedError):
            kind = "ChecksumError"
            is_a = ("IntegrityError",)
    """

    kind: str = "TaggedError"
    is_a: Tuple[str, ...] = ()


def error_kinds(error: BaseException) -> Tuple[str, ...]:
    """
    Return the kinds an error belongs to, most specific first.

    Tagged errors report their declared kind followed by is_a; any other
    error reports the names of the exception classes in its MRO.
    """
    if isinstance(error, TaggedError):
        kinds = [error.kind]
        kinds.extend(k for k in error.is_a if k != error.kind)
        return tuple(kinds)

    return tuple(
        cls.__name__ for cls in type(error).__mro__
        if issubclass(cls, BaseException)
    )


def describe_exception(error: BaseException) -> str:
    """"TypeName: message", or just the type name when there is no message."""
    message = str(error)
    if message:
        return f"{type(error).__name__}: {message}"
    return type(error).__name__
