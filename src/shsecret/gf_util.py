# This file is part of the shsecret project
#
# Copyright (c) 2022 shsecret contributors - MIT License
# SPDX-License-Identifier: MIT

"""Galois Field arithmetic functions."""

from typing import Set
from typing import List

from . import gf_lut

# The field has characteristic 2, so subtraction is the same
# operation as addition, namely exclusive or. Note that 0 and 1
# in the field are the true 0 and 1.


def add(a: int, b: int) -> int:
    assert 0 <= a < 256, a
    assert 0 <= b < 256, b
    return a ^ b


sub = add


def mul(a: int, b: int) -> int:
    assert 0 <= a < 256, a
    assert 0 <= b < 256, b
    return gf_lut.mul_lut()[a][b]


def inverse(val: int) -> int:
    if val == 0:
        raise ZeroDivisionError("0 has no multiplicative inverse")
    return gf_lut.inverse_lut()[val]


def div(a: int, b: int) -> int:
    return mul(a, inverse(b))


def pow_slow(a: int, b: int) -> int:
    res = 1
    n   = b
    while n > 0:
        res = mul(res, a)
        n -= 1
    return res


def inverse_slow(val: int) -> int:
    """Calculate multiplicative inverse in GF(256).

    Since the nonzero elements of GF(p^n) form a finite group with
    respect to multiplication,

      a^((p^n)−1) = 1         (for a != 0)

      thus the inverse of a is

      a^((p^n)−2).
    """
    if val == 0:
        return 0

    exp = 2 ** 8 - 2
    inv = pow_slow(val, exp)
    assert mul(val, inv) == 1
    return inv


def _mex(excluded: Set[int]) -> int:
    n = 0
    while n in excluded:
        n += 1
    return n


def mul_table_mex(size: int) -> List[List[int]]:
    """Conway multiplication table for all a, b < size.

    This follows the definition directly and is O(size**4), so it
    is only useful to validate gf_lut for small sizes.
    """
    assert 0 < size <= 256

    table = [[0] * size for _ in range(size)]
    for a in range(size):
        for b in range(size):
            excluded: Set[int] = set()
            for a_ in range(a):
                for b_ in range(b):
                    excluded.add(table[a_][b] ^ table[a_][b_] ^ table[a][b_])
            table[a][b] = _mex(excluded)
    return table
