"""
Self-tests for floating point comparisons.
"""

import numpy as np

import stf


@stf.test("Floats", "SingleEquality")
def single_equality():
    stf.assert_eq(np.float32(0.0), np.float32(0.0))


@stf.test("Floats", "DoubleEquality")
def double_equality():
    stf.assert_eq(0.0, 0.0)


@stf.test("Floats", "Inequality")
def inequality():
    stf.assert_ne(np.float32(0.0), np.float32(1.0))
    stf.assert_ne(0.0, 1.0)


@stf.test("Floats", "Ordering")
def ordering():
    stf.assert_gt(3.14, 1.0)
    stf.assert_ge(np.float32(3.14), np.float32(3.14))
    stf.assert_lt(np.float32(1.0), np.float32(3.14))
    stf.assert_le(3.14, 3.14)


@stf.test("Floats", "SingleClose")
def single_close():
    stf.assert_close(np.float32(100.00001), np.float32(100.00002), np.float32(0.0001))


@stf.test("Floats", "DoubleClose")
def double_close():
    stf.assert_close(100.0000001, 100.0000002, 0.00001)
    stf.assert_close(100.00001, 100.00002, 0.0001)


@stf.test("Floats", "ExtendedClose")
def extended_close():
    stf.assert_close(np.longdouble(1) / 3, np.longdouble(0.3333333333), np.longdouble(1e-9))


@stf.test("Floats", "TrueFalse")
def true_false():
    stf.assert_true(3.14 == 3.14)
    stf.assert_false(3.14 == 2.75)
