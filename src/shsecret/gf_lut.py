# This file is part of the shsecret project
#
# Copyright (c) 2022 shsecret contributors - MIT License
# SPDX-License-Identifier: MIT

"""Lookup tables for Conway multiplication in GF(2**8).

The field uses xor for addition and Conway (nimber) multiplication,
which is defined as a minimal excludant:

    a * b = the smallest n not equal to (a' * b) ^ (a' * b') ^ (a * b')
            for any a' < a and b' < b

This is not the Rijndael field. Shares produced by other
implementations of this scheme can only be combined if this exact
table is reproduced, so the tables here must never change.

Evaluating the mex definition for all 65536 products is too slow,
so the table is built by doubling the field size instead. For a
Fermat 2-power F = 2**(2**k), every element x < F*F can be written
as x = a*F ^ b with a, b < F, multiplication by F of an element
below F is an ordinary shift, and F * F = F ^ (F >> 1). This gives

    (a*F ^ b) * (c*F ^ d) = (ac ^ ad ^ bc) * F ^ ac * (F >> 1) ^ bd

where all products on the right hand side are in the smaller field.
Starting from GF(2) the tables for GF(4), GF(16) and GF(256) are
built one after the other.
"""

import threading
from typing import List
from typing import Tuple

MulTable = Tuple[Tuple[int, ...], ...]

MUL_LUT        : MulTable        = ()
MUL_INVERSE_LUT: Tuple[int, ...] = ()

# rows of MUL_LUT as bytes, for use with bytes.translate
MUL_TRANSLATE_LUT: Tuple[bytes, ...] = ()

_init_lock = threading.Lock()


def _next_mul_table(prev_table: List[List[int]], half_bits: int) -> List[List[int]]:
    fermat      = 1 << half_bits
    low_mask    = fermat - 1
    half_fermat = fermat >> 1
    size        = fermat * fermat

    table = [[0] * size for _ in range(size)]
    for x in range(size):
        a = x >> half_bits
        b = x & low_mask
        row = table[x]
        for y in range(size):
            c = y >> half_bits
            d = y & low_mask

            ac = prev_table[a][c]
            hi = ac ^ prev_table[a][d] ^ prev_table[b][c]
            lo = prev_table[ac][half_fermat] ^ prev_table[b][d]
            row[y] = (hi << half_bits) | lo
    return table


def build_mul_table() -> MulTable:
    """Build the Conway multiplication table for GF(256)."""
    # GF(2): ordinary multiplication of 0 and 1
    table = [[0, 0], [0, 1]]
    bits  = 1
    while bits < 8:
        table = _next_mul_table(table, half_bits=bits)
        bits  = bits * 2

    assert len(table) == 256
    return tuple(tuple(row) for row in table)


def build_inverse_table(mul_table: MulTable) -> Tuple[int, ...]:
    # inverse of 0 is undefined, 0 is stored as a placeholder
    inverses = [0] * 256
    for a in range(1, 256):
        inverses[a] = mul_table[a].index(1)
    return tuple(inverses)


def init_mul_lut() -> None:
    """Initialize the lookup tables (once per process)."""
    # pylint: disable=global-statement
    global MUL_LUT
    global MUL_INVERSE_LUT
    global MUL_TRANSLATE_LUT

    with _init_lock:
        if MUL_LUT:
            return

        mul_table         = build_mul_table()
        inverse_table     = build_inverse_table(mul_table)
        MUL_TRANSLATE_LUT = tuple(bytes(row) for row in mul_table)
        MUL_INVERSE_LUT   = inverse_table
        # assigned last, a non-empty MUL_LUT marks the tables as ready
        MUL_LUT = mul_table


def mul_lut() -> MulTable:
    if not MUL_LUT:
        init_mul_lut()
    return MUL_LUT


def inverse_lut() -> Tuple[int, ...]:
    if not MUL_LUT:
        init_mul_lut()
    return MUL_INVERSE_LUT


def translate_lut() -> Tuple[bytes, ...]:
    if not MUL_LUT:
        init_mul_lut()
    return MUL_TRANSLATE_LUT


def main() -> None:
    for table in [mul_lut()[2], inverse_lut()]:
        print()
        for i, n in enumerate(table):
            mstr = hex(n)[2:]
            print(f"{mstr:>02}", end=" ")
            if (i + 1) % 16 == 0:
                print()
        print()


if __name__ == '__main__':
    main()
