"""
Self-tests comparing values of different but comparable types.
"""

import numpy as np

import stf


@stf.test("DissimilarTypes", "Equal")
def equal():
    stf.assert_eq(np.int8(97), np.uint8(97))
    stf.assert_eq(np.int32(1), np.int64(1))
    stf.assert_eq(np.uint32(1), np.uint64(1))
    stf.assert_eq(0, np.uint64(0))
    stf.assert_eq(1, 1.0)


@stf.test("DissimilarTypes", "Inequality")
def inequality():
    stf.assert_ne(np.int8(97), np.uint8(98))
    stf.assert_ne(np.int32(1), np.int64(2))
    stf.assert_ne(np.uint32(1), np.uint64(2))


@stf.test("DissimilarTypes", "Ordering")
def ordering():
    stf.assert_gt(np.int8(98), np.uint8(97))
    stf.assert_gt(np.int32(2), np.int64(1))
    stf.assert_ge(np.uint32(2), np.uint64(1))
    stf.assert_ge(np.int8(97), np.uint8(97))
    stf.assert_lt(np.uint32(1), np.uint64(2))
    stf.assert_le(np.int32(1), np.int64(1))
    stf.assert_lt(1, 1.5)
