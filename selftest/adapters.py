"""
Self-tests for comparing integral sequences shown through the hex adapters.
"""

import array

import numpy as np

import stf


@stf.test("Adapters", "IntegralArrays")
def integral_arrays():
    array1 = np.array([
        0xa4, 0x4a, 0x82, 0x66, 0xee, 0x1c, 0x8e, 0xb0,
        0xc8, 0xb5, 0xd4, 0xcf, 0x5a, 0xe9, 0xf1, 0x9a
    ], dtype=np.uint8)
    array2 = array1.copy()

    stf.assert_eq(array1, array2)


@stf.test("Adapters", "IntegralVector")
def integral_vector():
    vec1 = array.array("B", [
        0x00, 0x11, 0x22, 0x33, 0x44, 0x55, 0x66, 0x77,
        0x88, 0x99, 0xaa, 0xbb, 0xcc, 0xdd, 0xee, 0xff
    ])
    vec2 = array.array("B", vec1)

    stf.assert_eq(vec1, vec2)
