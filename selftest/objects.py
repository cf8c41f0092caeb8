"""
Self-tests for user-defined objects, printable or not.
"""

import functools

import stf


@functools.total_ordering
class SomeObject:
    def __init__(self, value: int):
        self.value = value

    def __eq__(self, other):
        return self.value == other.value

    def __lt__(self, other):
        return self.value < other.value

    def __str__(self):
        return f"SomeObject{{{self.value}}}"


class SomeOtherObject(SomeObject):
    def __str__(self):
        return f"SomeOtherObject{{{self.value}}}"


@functools.total_ordering
class OpaqueObject:
    """Comparable but without a textual representation."""

    def __init__(self, value: int):
        self.value = value

    def __eq__(self, other):
        return self.value == other.value

    def __lt__(self, other):
        return self.value < other.value


@stf.test("Objects", "Equal")
def equal():
    stf.assert_eq(SomeObject(10), SomeObject(10))


@stf.test("Objects", "Inequality")
def inequality():
    stf.assert_ne(SomeObject(10), SomeObject(20))


@stf.test("Objects", "Ordering")
def ordering():
    stf.assert_gt(SomeObject(20), SomeObject(10))
    stf.assert_ge(SomeObject(10), SomeObject(10))
    stf.assert_lt(SomeObject(10), SomeObject(20))
    stf.assert_le(SomeObject(20), SomeObject(20))


@stf.test("Objects", "TrueFalse")
def true_false():
    stf.assert_true(SomeObject(20) == SomeObject(20))
    stf.assert_false(SomeObject(10) == SomeObject(20))


@stf.test("Objects", "Opaque")
def opaque():
    stf.assert_eq(OpaqueObject(1), OpaqueObject(1))
    stf.assert_lt(OpaqueObject(1), OpaqueObject(2))


@stf.test("DissimilarTypes", "Objects")
def dissimilar_objects():
    # A subclass compares through its base class operators
    stf.assert_eq(SomeObject(10), SomeOtherObject(10))
    stf.assert_ne(SomeObject(10), SomeOtherObject(20))
    stf.assert_lt(SomeObject(10), SomeOtherObject(20))
