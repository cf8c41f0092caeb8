"""
Property-based tests for the comparator and hex formatting using Hypothesis.
"""

import io

from hypothesis import given, settings, strategies as st

from stf.adapters import format_integral_vector
from stf.comparator import Comparator, memory_hex, _octets
from stf.output import ConsoleReporter
from stf.printer import ValuePrinter, integral_byte_width, to_hex


def make_comparator():
    return Comparator(ValuePrinter(ConsoleReporter(io.StringIO())))


class TestComparisonProperties:
    """Properties of the ordering and equality checks."""

    @given(st.integers(), st.integers())
    @settings(max_examples=100)
    def test_eq_and_ne_are_complementary(self, a, b):
        """Property: exactly one of check_equal and check_not_equal holds."""
        comparator = make_comparator()
        assert comparator.check_equal("p.py", 1, a, b) != comparator.check_not_equal("p.py", 1, a, b)

    @given(st.integers(), st.integers())
    @settings(max_examples=100)
    def test_ordering_is_consistent(self, a, b):
        """Property: lt(a, b) == gt(b, a) and le == lt or eq."""
        comparator = make_comparator()
        assert comparator.check_less("p.py", 1, a, b) == comparator.check_greater("p.py", 1, b, a)
        assert comparator.check_less_equal("p.py", 1, a, b) == (
            comparator.check_less("p.py", 1, a, b) or comparator.check_equal("p.py", 1, a, b)
        )

    @given(st.floats(allow_nan=False, allow_infinity=False, min_value=-1e6, max_value=1e6))
    @settings(max_examples=100)
    def test_value_is_close_to_itself(self, value):
        """Property: any finite value is within a positive epsilon of itself."""
        assert make_comparator().check_close("p.py", 1, value, value, 1e-9)


class TestMemoryProperties:
    """Properties of the byte range checks."""

    @given(st.binary(max_size=64), st.binary(max_size=64))
    @settings(max_examples=100)
    def test_mem_eq_and_mem_ne_are_complementary(self, left, right):
        """Property: over the common length, exactly one check holds."""
        comparator = make_comparator()
        length = min(len(left), len(right))
        equal = comparator.check_memory_equal("p.py", 1, left, right, length)
        not_equal = comparator.check_memory_not_equal("p.py", 1, left, right, length)
        assert equal != not_equal
        assert equal == (left[:length] == right[:length])

    @given(st.binary(max_size=64))
    def test_memory_hex_has_one_token_per_octet(self, data):
        """Property: the dump holds one two-digit token per octet."""
        text = memory_hex(_octets(data, len(data)))
        assert text.startswith("0x")
        tokens = text[2:].split()
        assert len(tokens) == len(data)
        assert all(len(t) == 2 for t in tokens)
        assert bytes(int(t, 16) for t in tokens) == data


class TestHexProperties:
    """Properties of integral hex formatting."""

    @given(st.integers(min_value=-(2 ** 63), max_value=2 ** 64 - 1))
    def test_width_holds_value(self, value):
        """Property: the chosen width is 1, 2, 4 or 8 bytes and holds the value."""
        width = integral_byte_width(value)
        assert width in (1, 2, 4, 8)
        if value < 0:
            assert value >= -(1 << (8 * width - 1))
        else:
            assert value < (1 << (8 * width))

    @given(st.integers(min_value=0, max_value=2 ** 32 - 1))
    def test_hex_round_trips_for_unsigned(self, value):
        """Property: to_hex output parses back to the value."""
        width = integral_byte_width(value)
        assert int(to_hex(value, width), 16) == value

    @given(st.lists(st.integers(min_value=0, max_value=255), min_size=1, max_size=32))
    def test_byte_lists_use_two_digit_tokens(self, values):
        """Property: byte-sized values always render as two hex digits each."""
        text = format_integral_vector(values)
        assert len(text[2:].split()) == len(values)
        assert all(len(t) == 2 for t in text[2:].split())
