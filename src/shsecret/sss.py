# This file is part of the shsecret project
#
# Copyright (c) 2022 shsecret contributors - MIT License
# SPDX-License-Identifier: MIT

"""Lagrange interpolation of byte buffers over GF(256).

All buffers of values are the same length. To create N values with a
threshold of M from some reference value:

    input point 0 is the reference value
    input points 1 to M-1 are (cryptographically random) values
    output points 1 to N are the shares

To recover the reference value from M shares:

    input points are the x coordinates of the shares
    output point 0 is the recovered reference value

Each byte offset is an independent field computation. Suppose z_i
are the output points, x_j the input points and y_j the input value
(at some byte offset) for x_j. The product of the (X - x_k) for all
k != j is zero at every x_k except x_j, where it has the value
in_cross[j]. Dividing that product by in_cross[j] gives a polynomial
P_j which is 1 at x_j and 0 at every other x_k, so the sum (xor) of
the y_j * P_j is the interpolating polynomial. With out_cross[i] the
product of the (z_i - x_k) for every k,

    P_j(z_i) = out_cross[i] / ((z_i - x_j) * in_cross[j])

which is undefined if z_i == x_j. For such an output point the value
of the polynomial is simply y_j.
"""

from typing import List
from typing import Optional

from . import gf
from . import gf_lut
from . import gf_poly
from . import common_types as ct

MAX_POINTS = 256


def cross_products(in_points: ct.PointValues, out_points: ct.PointValues) -> ct.CrossProducts:
    """Calculate the normalization factors in_cross and out_cross."""
    mul_lut = gf_lut.mul_lut()

    in_cross: List[ct.FieldElement] = []
    for j, x_j in enumerate(in_points):
        accu = 1
        for k, x_k in enumerate(in_points):
            if k != j:
                accu = mul_lut[accu][x_j ^ x_k]
        in_cross.append(accu)

    out_cross: List[ct.FieldElement] = []
    for z_i in out_points:
        accu = 1
        for x_k in in_points:
            accu = mul_lut[accu][z_i ^ x_k]
        out_cross.append(accu)

    return ct.CrossProducts(in_cross, out_cross)


def coincident_index(in_points: ct.PointValues, out_point: ct.PointValue) -> Optional[int]:
    for j, x_j in enumerate(in_points):
        if x_j == out_point:
            return j
    return None


def lagrange_weights(
    in_points: ct.PointValues,
    in_cross : List[ct.FieldElement],
    out_point: ct.PointValue,
    out_cross: ct.FieldElement,
) -> List[ct.FieldElement]:
    """Values of the basis polynomials P_j at out_point.

    Only valid if out_point is not one of in_points.
    """
    mul_lut = gf_lut.mul_lut()
    inv_lut = gf_lut.inverse_lut()

    weights: List[ct.FieldElement] = []
    for x_j, in_cross_j in zip(in_points, in_cross):
        denum = mul_lut[in_cross_j][out_point ^ x_j]
        assert denum != 0
        weights.append(mul_lut[out_cross][inv_lut[denum]])
    return weights


def _validate_args(
    in_points : ct.PointValues,
    out_points: ct.PointValues,
    in_values : ct.InValueBuffers,
    out_values: ct.OutValueBuffers,
) -> None:
    # These are preconditions for the caller. Invalid arguments are
    # a bug in the calling code, not a runtime error.
    assert len(in_points ) == len(in_values ) <= MAX_POINTS
    assert len(out_points) == len(out_values) <= MAX_POINTS
    assert len(set(in_points)) == len(in_points), "input points must be distinct"
    assert all(0 <= p < 256 for p in in_points)
    assert all(0 <= p < 256 for p in out_points)
    if in_values:
        ln = len(in_values[0])
        assert all(len(buf) == ln for buf in in_values)
        assert all(len(buf) == ln for buf in out_values)


def transform(
    in_points : ct.PointValues,
    out_points: ct.PointValues,
    in_values : ct.InValueBuffers,
    out_values: ct.OutValueBuffers,
) -> None:
    """Evaluate the polynomial through the inputs at every output point.

    The results are written into the (preallocated) out_values.
    """
    _validate_args(in_points, out_points, in_values, out_values)

    in_cross, out_cross = cross_products(in_points, out_points)
    translate_lut = gf_lut.translate_lut()

    for i, z_i in enumerate(out_points):
        out_buf = out_values[i]
        ln      = len(out_buf)

        j = coincident_index(in_points, z_i)
        if j is not None:
            out_buf[:] = in_values[j]
            continue

        weights = lagrange_weights(in_points, in_cross, z_i, out_cross[i])

        # Since the weight of each input is the same for every byte
        # offset, the products of a whole buffer are a single translate
        # with the multiplication row of the weight. The terms are
        # summed (xor) as big integers.
        accu = 0
        for in_buf, weight in zip(in_values, weights):
            term = in_buf.translate(translate_lut[weight])
            accu ^= int.from_bytes(term, byteorder="big")

        out_buf[:] = accu.to_bytes(ln, byteorder="big")


def transform_bytes(
    in_points : ct.PointValues,
    out_points: ct.PointValues,
    in_values : ct.InValueBuffers,
) -> List[bytes]:
    """Like transform, but allocates and returns the output values."""
    ln         = len(in_values[0]) if in_values else 0
    out_values = [bytearray(ln) for _ in out_points]
    transform(in_points, out_points, in_values, out_values)
    return [bytes(buf) for buf in out_values]


def transform_slow(
    in_points : ct.PointValues,
    out_points: ct.PointValues,
    in_values : ct.InValueBuffers,
    out_values: ct.OutValueBuffers,
) -> None:
    """Reference implementation of transform.

    Interpolates every byte offset separately with the textbook
    formula of gf_poly.interpolate, using GF256 numbers. Neither the
    cross products nor the multiplication rows are involved, so this
    is only useful to validate transform.
    """
    _validate_args(in_points, out_points, in_values, out_values)

    field = gf.FieldGF256()
    xs    = [field[x_j] for x_j in in_points]

    for t in range(len(in_values[0]) if in_values else 0):
        points = tuple(gf_poly.Point(x, field[in_buf[t]]) for x, in_buf in zip(xs, in_values))
        for i, z_i in enumerate(out_points):
            out_values[i][t] = gf_poly.interpolate(points, at_x=field[z_i]).val
