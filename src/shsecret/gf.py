# This file is part of the shsecret project
#
# Copyright (c) 2022 shsecret contributors - MIT License
# SPDX-License-Identifier: MIT

"""Main Galois Field Types and API.

GF256 wraps the table lookups of gf_util so that field math can be
written with ordinary operators. It is much slower than working on
plain ints and is used where readability matters more than speed.
"""

import functools

from . import gf_util


@functools.total_ordering
class GF256:

    val  : int
    order: int = 256

    def __init__(self, val: int, order: int = 256) -> None:
        assert order == 256
        assert 0 <= val < 256, val
        self.val = val

    def __add__(self, other: 'GF256') -> 'GF256':
        return ALL_GF256[self.val ^ other.val]

    def __sub__(self, other: 'GF256') -> 'GF256':
        return ALL_GF256[self.val ^ other.val]

    def __neg__(self) -> 'GF256':
        # characteristic 2, every element is its own additive inverse
        return self

    def __mul__(self, other: 'GF256') -> 'GF256':
        return ALL_GF256[gf_util.mul(self.val, other.val)]

    def __pow__(self, other: 'GF256') -> 'GF256':
        val = gf_util.pow_slow(self.val, other.val)
        return ALL_GF256[val]

    def __invert__(self) -> 'GF256':
        return ALL_GF256[gf_util.inverse(self.val)]

    def __truediv__(self, other: 'GF256') -> 'GF256':
        return self * ~other

    def _check_comparable(self, other: object) -> None:
        if isinstance(other, int):
            if not (0 <= other < 256):
                errmsg = f"GF comparison with integer faild: 0 <= {other} < 256"
                raise ValueError(errmsg)
        elif not isinstance(other, GF256):
            errmsg = f"Cannot compare {repr(self)} with {repr(other)}"
            raise NotImplementedError(errmsg)

    def __hash__(self) -> int:
        return hash(self.val)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True

        if isinstance(other, GF256):
            return self.val == other.val

        self._check_comparable(other)
        assert isinstance(other, int)
        return self.val == other

    def __lt__(self, other: object) -> bool:
        if self is other:
            return False

        if isinstance(other, GF256):
            return self.val < other.val

        self._check_comparable(other)
        assert isinstance(other, int)
        return self.val < other

    def __repr__(self) -> str:
        return f"GF256({self.val:>3})"


# Cache so we don't end up with millions of objects
# that all represent the same set of integers.
ALL_GF256 = [GF256(n) for n in range(256)]


class FieldGF256:

    order: int = 256

    def __getitem__(self, val: int) -> GF256:
        assert 0 <= val < 256
        return ALL_GF256[val]
