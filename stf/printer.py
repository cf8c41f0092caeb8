"""
Value printer for the Simple Test Framework.

Converts a single value plus a label into one diagnostic line. The rendering
is chosen by category, checked in priority order:

    boolean -> character -> integral -> floating point -> pointer or array
            -> registered formatter -> printable object -> opaque object

A type is "printable" when it overrides __str__ or __repr__; anything else
is shown as an unprintable object identified by its address, so printing a
value can never fail because of what the type lacks.
"""

import ctypes
from typing import Any, Callable, Dict, Optional, Type

import numpy as np
import logging

from .output import ConsoleReporter
from .utils.constants import DEFAULT_FLOAT_PRECISION, ValueCategory

logger = logging.getLogger(__name__)

Formatter = Callable[[Any], Optional[str]]

_POINTER_TYPES = (
    ctypes._Pointer,
    ctypes.Array,
    ctypes.c_void_p,
    ctypes.c_char_p,
    ctypes.c_wchar_p,
    memoryview,
)


def integral_byte_width(value: int) -> int:
    """
    Smallest of 1, 2, 4 or 8 bytes that holds value in two's complement.

    Values that need more than 8 bytes get the number of bytes they need.
    """
    if value < 0:
        bits = (~value).bit_length() + 1
    else:
        bits = value.bit_length()
    nbytes = max(1, (bits + 7) // 8)
    for width in (1, 2, 4, 8):
        if nbytes <= width:
            return width
    return nbytes


def to_hex(value: int, nbytes: int) -> str:
    """Zero-padded hex digits of value truncated to nbytes (no prefix)."""
    mask = (1 << (8 * nbytes)) - 1
    return format(int(value) & mask, f"0{nbytes * 2}x")


def address_of(value: Any) -> Optional[int]:
    """
    Address a pointer-like value refers to; never dereferences it.

    Returns None when the address cannot be determined.
    """
    if isinstance(value, ctypes.Array):
        return ctypes.addressof(value)
    if isinstance(value, (ctypes._Pointer, ctypes.c_char_p, ctypes.c_wchar_p)):
        return ctypes.cast(value, ctypes.c_void_p).value or 0
    if isinstance(value, ctypes.c_void_p):
        return value.value or 0
    if isinstance(value, memoryview):
        # numpy views read-only and strided buffers without copying
        try:
            return np.asarray(value).__array_interface__["data"][0]
        except (TypeError, ValueError, NotImplementedError) as e:
            logger.debug(f"No buffer address for memoryview of format {value.format!r}: {e}")
    return None


def is_printable_type(value_type: Type) -> bool:
    """True if the type provides its own textual representation."""
    return (value_type.__str__ is not object.__str__ or
            value_type.__repr__ is not object.__repr__)


class ValuePrinter:
    """Formats values for failure diagnostics."""

    def __init__(
        self,
        reporter: Optional[ConsoleReporter] = None,
        float_precision: int = DEFAULT_FLOAT_PRECISION
    ):
        """
        Initialize value printer.

        Args:
            reporter: Where print_value() writes (defaults to stdout)
            float_precision: Significant digits for floating point values
        """
        self.reporter = reporter or ConsoleReporter()
        self.float_precision = float_precision
        self._formatters: Dict[Type, Formatter] = {}
        self._categories: Dict[Type, ValueCategory] = {}
        self._renderers: Dict[ValueCategory, Callable[[Any], str]] = {
            ValueCategory.BOOLEAN: self._format_boolean,
            ValueCategory.CHARACTER: self._format_character,
            ValueCategory.INTEGRAL: self._format_integral,
            ValueCategory.FLOATING_POINT: self._format_floating_point,
            ValueCategory.POINTER_OR_ARRAY: self._format_pointer,
            ValueCategory.PRINTABLE: self._format_printable,
            ValueCategory.OPAQUE: self._format_opaque,
        }

    def register_formatter(self, value_type: Type, formatter: Formatter) -> None:
        """
        Register a formatter for value_type and its subclasses.

        The formatter may return None to decline a value, which is then
        printed as a printable or opaque object.
        """
        self._formatters[value_type] = formatter
        self._categories.clear()
        logger.debug(f"Registered formatter for {value_type.__name__}")

    def has_formatter(self, value_type: Type) -> bool:
        return self._formatter_for(value_type) is not None

    def _formatter_for(self, value_type: Type) -> Optional[Formatter]:
        for cls in value_type.__mro__:
            if cls in self._formatters:
                return self._formatters[cls]
        return None

    def categorize(self, value: Any) -> ValueCategory:
        """Return the dispatch category for value."""
        # Strings and byte strings are only character-like when one long
        if isinstance(value, (str, np.bytes_)):
            if len(value) == 1:
                return ValueCategory.CHARACTER
            return self._textual_category(type(value))

        value_type = type(value)
        category = self._categories.get(value_type)
        if category is None:
            category = self._classify(value_type)
            self._categories[value_type] = category
        return category

    def _classify(self, value_type: Type) -> ValueCategory:
        if issubclass(value_type, (bool, np.bool_)):
            return ValueCategory.BOOLEAN
        if issubclass(value_type, (int, np.integer)):
            return ValueCategory.INTEGRAL
        if issubclass(value_type, (float, np.floating)):
            return ValueCategory.FLOATING_POINT
        if issubclass(value_type, _POINTER_TYPES):
            return ValueCategory.POINTER_OR_ARRAY
        if self._formatter_for(value_type) is not None:
            return ValueCategory.FORMATTED
        return self._textual_category(value_type)

    def _textual_category(self, value_type: Type) -> ValueCategory:
        if is_printable_type(value_type):
            return ValueCategory.PRINTABLE
        return ValueCategory.OPAQUE

    def format_value(self, value: Any) -> str:
        """Render value as diagnostic text."""
        category = self.categorize(value)
        if category is ValueCategory.FORMATTED:
            text = self._formatter_for(type(value))(value)
            if text is not None:
                return text
            category = self._textual_category(type(value))
        return self._renderers[category](value)

    def print_value(self, label: str, value: Any) -> None:
        """Print "<label><value>" as one line."""
        self.reporter.line(f"{label}{self.format_value(value)}")

    def print_text(self, label: str, text: str) -> None:
        """Print a literal message after a label."""
        self.reporter.line(f"{label}{text}")

    def _format_boolean(self, value: Any) -> str:
        return "True" if value else "False"

    def _format_character(self, value: Any) -> str:
        if isinstance(value, bytes):
            code = value[0]
            char = chr(code)
            kind, width = "byte", 1
        else:
            code = ord(value)
            char = value
            kind = "char"
            width = 1 if code <= 0xFF else (2 if code <= 0xFFFF else 4)

        if kind == "byte":
            printable = 0x20 <= code < 0x7f
        else:
            printable = char.isprintable()
        hint = f"'{char}' " if printable else ""
        return f"{hint}({kind} 0x{to_hex(code, width)})"

    def _format_integral(self, value: Any) -> str:
        if isinstance(value, np.integer):
            nbytes = value.dtype.itemsize
        else:
            nbytes = integral_byte_width(value)
        return f"{int(value)} (0x{to_hex(value, nbytes)})"

    def _format_floating_point(self, value: Any) -> str:
        if isinstance(value, np.floating) and value.dtype.itemsize > 8:
            return np.format_float_positional(
                value, precision=self.float_precision, unique=False,
                fractional=False, trim='-'
            )
        return format(float(value), f".{self.float_precision}g")

    def _format_pointer(self, value: Any) -> str:
        address = address_of(value)
        if address is None:
            return f"[{type(value).__name__} at unknown memory address]"
        return f"0x{address:x} (memory address)"

    def _format_printable(self, value: Any) -> str:
        return str(value)

    def _format_opaque(self, value: Any) -> str:
        return f"[Unprintable object at address 0x{id(value):x}]"
