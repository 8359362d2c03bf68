# This file is part of the shsecret project
#
# Copyright (c) 2022 shsecret contributors - MIT License
# SPDX-License-Identifier: MIT
"""Types used across multiple modules."""

from typing import Any
from typing import List
from typing import Union
from typing import Sequence
from typing import NamedTuple

# from typing import TypeAlias
TypeAlias = Any

# int in range(256), interpreted as an element of GF(256)
FieldElement: TypeAlias = int

# abscissa at which the interpolating polynomial is evaluated
PointValue : TypeAlias = int
PointValues: TypeAlias = Sequence[PointValue]

ValueBuffer    : TypeAlias = Union[bytes, bytearray]
InValueBuffers : TypeAlias = Sequence[ValueBuffer]
OutValueBuffers: TypeAlias = Sequence[bytearray]


class CrossProducts(NamedTuple):
    in_cross : List[FieldElement]
    out_cross: List[FieldElement]


class RawShare(NamedTuple):
    x_coord: PointValue
    data   : bytes  # the y values, one per byte of the secret


RawShares: TypeAlias = Sequence[RawShare]

Secret: TypeAlias = bytes
