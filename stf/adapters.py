"""
Hex-dump adapters for integral sequences.

These render fixed-size integral arrays (numpy arrays) and variable-size
integral sequences (array.array, bytes, bytearray, lists of ints) as a
single "0x" followed by space separated, zero-padded hex tokens, e.g.
"0x00 11 22". install_hex_adapters() plugs them into a ValuePrinter so that
failing comparisons of such sequences print as hex.
"""

import array
from typing import Iterable, Optional, Sequence

import numpy as np

from .printer import ValuePrinter, integral_byte_width, to_hex


def _hex_tokens(values: Iterable[int], nbytes: int) -> str:
    return "0x" + " ".join(to_hex(v, nbytes) for v in values)


def format_integral_array(values: np.ndarray) -> Optional[str]:
    """
    Hex dump of a numpy array with an integral dtype.

    Returns None for non-integral arrays so the printer falls back to the
    array's own text.
    """
    if values.dtype.kind not in ("i", "u"):
        return None
    return _hex_tokens((int(v) for v in values.ravel()), values.dtype.itemsize)


def format_integral_vector(values: Sequence[int], width: Optional[int] = None) -> Optional[str]:
    """
    Hex dump of a variable-size integral sequence.

    Args:
        values: array.array, bytes, bytearray or a sequence of ints
        width: Element width in bytes; derived from the sequence when omitted

    Returns:
        Hex string, or None if the sequence holds non-integral items
    """
    if isinstance(values, array.array):
        if values.typecode in ("f", "d", "u", "w"):
            return None
        nbytes = width or values.itemsize
    elif isinstance(values, (bytes, bytearray)):
        nbytes = width or 1
    else:
        items = list(values)
        if not all(isinstance(v, (int, np.integer)) and not isinstance(v, bool) for v in items):
            return None
        if width is None:
            width = max((integral_byte_width(int(v)) for v in items), default=1)
        return _hex_tokens(items, width)

    return _hex_tokens(values, nbytes)


def _format_int_list(values: list) -> Optional[str]:
    if not values:
        return None
    return format_integral_vector(values)


def install_hex_adapters(printer: ValuePrinter) -> None:
    """Register the hex adapters in printer's formatter table."""
    printer.register_formatter(np.ndarray, format_integral_array)
    printer.register_formatter(array.array, format_integral_vector)
    printer.register_formatter(bytes, format_integral_vector)
    printer.register_formatter(bytearray, format_integral_vector)
    printer.register_formatter(list, _format_int_list)
