"""
Self-tests for integral comparisons.
"""

import numpy as np

import stf


@stf.test("Integrals", "Equal")
def equal():
    stf.assert_eq(True, True)
    stf.assert_eq('a', 'a')
    stf.assert_eq(1, 1)
    stf.assert_eq(np.uint64(1), np.uint64(1))
    stf.assert_eq(1, np.int64(1))
    stf.assert_eq(1, np.uint64(1))


@stf.test("Integrals", "Inequality")
def inequality():
    stf.assert_ne(True, False)
    stf.assert_ne('a', 'b')
    # 140 wraps to -116 as a signed byte
    stf.assert_ne(np.uint8(140).astype(np.int8), np.uint8(140))
    stf.assert_ne(1, 2)
    stf.assert_ne(np.uint64(1), np.uint64(2))
    stf.assert_ne(0, np.int64(1))


@stf.test("Integrals", "Greater")
def greater():
    stf.assert_gt('b', 'a')
    stf.assert_gt(2, 1)
    stf.assert_gt(np.uint64(2), np.uint64(1))


@stf.test("Integrals", "GreaterEqual")
def greater_equal():
    stf.assert_ge('a', 'a')
    stf.assert_ge(2, 1)
    stf.assert_ge(np.uint64(2), np.uint64(1))
    stf.assert_ge(2, 2)


@stf.test("Integrals", "Less")
def less():
    stf.assert_lt('a', 'b')
    stf.assert_lt(1, 2)
    stf.assert_lt(np.int16(-5), np.int16(5))


@stf.test("Integrals", "LessEqual")
def less_equal():
    stf.assert_le('a', 'a')
    stf.assert_le(1, 2)
    stf.assert_le(np.uint32(7), np.uint32(7))


@stf.test("Integrals", "TrueFalse")
def true_false():
    stf.assert_true(1 == 1)
    stf.assert_true(5)
    stf.assert_false(1 == 2)
    stf.assert_false(0)
