# This file is part of the shsecret project
#
# Copyright (c) 2022 shsecret contributors - MIT License
# SPDX-License-Identifier: MIT

"""Polynomial calculation functions.

Mainly lagrange interpolation logic for single field elements.
The functions here are the textbook formulation; shsecret.sss
implements the same interpolation for whole buffers.

Helpful introduction: https://www.youtube.com/watch?v=kkMps3X_tEE
(Simple introduction to Shamir's Secret Sharing and Lagrange interpolation)
"""

from typing import List
from typing import Tuple
from typing import Callable
from typing import Iterator
from typing import Sequence

from . import gf

Coefficients = List[gf.GF256]


class Point:

    x: gf.GF256
    y: gf.GF256

    def __init__(self, x: gf.GF256, y: gf.GF256) -> None:
        self.x = x
        self.y = y

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Point):
            result = self.x == other.x and self.y == other.y
            assert isinstance(result, bool)
            return result
        else:
            raise NotImplementedError

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y})"

    def __iter__(self) -> Iterator[gf.GF256]:
        yield self.x
        yield self.y


Points = Tuple[Point, ...]


def prod(vals: Sequence[gf.GF256]) -> gf.GF256:
    """Product of numbers.

    This is sometimes also denoted by Π (upper case PI).
    The empty product is 1.
    """
    accu = gf.ALL_GF256[1]
    for val in vals:
        accu *= val
    return accu


def _interpolation_terms(points: Points, at_x: gf.GF256) -> Iterator[gf.GF256]:
    for i, p in enumerate(points):
        others = points[:i] + points[i + 1 :]
        assert len(others) == len(points) - 1

        numer = prod(tuple(at_x - o.x for o in others))
        denum = prod(tuple(p.x  - o.x for o in others))

        yield (p.y * numer) / denum


def interpolate(points: Points, at_x: gf.GF256) -> gf.GF256:
    r"""Interpolate y value at x for a polynomial."""
    if len(points) < 1:
        raise ValueError("Cannot interpolate without points")

    x_vals = tuple(p.x for p in points)
    if len(x_vals) != len(set(x_vals)):
        raise ValueError(f"Points must be distinct {points}")

    accu = gf.ALL_GF256[0]
    for term in _interpolation_terms(points, at_x=at_x):
        accu += term
    return accu


def poly_eval_fn(coeffs: Coefficients) -> Callable[[gf.GF256], gf.GF256]:
    """Return function to evaluate polynomial at x."""

    def eval_at(at_x: gf.GF256) -> gf.GF256:
        """Evaluate polynomial at x (Horner's method)."""
        y = gf.ALL_GF256[0]
        for coeff in reversed(coeffs):
            y = y * at_x + coeff
        return y

    return eval_at
