"""
Self-tests for byte-range comparisons and pointer-like values.
"""

import ctypes

import stf


@stf.test("Memory", "Equal")
def equal():
    array1 = bytes([0x01, 0x02, 0x08, 0x04])
    array2 = bytes([0x01, 0x02, 0x08, 0x04])

    stf.assert_mem_eq(array1, array2, len(array1))


@stf.test("Memory", "NotEqual")
def not_equal():
    array1 = bytes([0x01, 0x02, 0x08, 0x04])
    array2 = bytes([0x01, 0x02, 0x08, 0x05])

    stf.assert_mem_ne(array1, array2, len(array1))


@stf.test("Memory", "Buffers")
def buffers():
    buffer1 = bytearray(100)
    buffer2 = bytearray(100)

    stf.assert_eq(len(buffer1), len(buffer2))

    buffer1[50] = ord('a')
    buffer2[50] = ord('a')

    stf.assert_mem_eq(buffer1, buffer2, len(buffer1))


@stf.test("Memory", "Prefix")
def prefix():
    # Only the first length octets take part
    stf.assert_mem_eq(b"abcdef", b"abcxyz", 3)
    stf.assert_mem_eq(b"", b"", 0)


@stf.test("Memory", "CtypesArrays")
def ctypes_arrays():
    values1 = (ctypes.c_uint32 * 4)(1, 2, 3, 4)
    values2 = (ctypes.c_uint32 * 4)(1, 2, 3, 5)

    stf.assert_mem_eq(values1, values1, ctypes.sizeof(values1))
    stf.assert_mem_ne(values1, values2, ctypes.sizeof(values1))


@stf.test("Memory", "Pointers")
def pointers():
    value = ctypes.c_int(0)
    other = ctypes.c_int(0)

    stf.assert_eq(ctypes.addressof(value), ctypes.addressof(value))
    stf.assert_ne(ctypes.addressof(value), ctypes.addressof(other))
