# This file is part of the shsecret project
#
# Copyright (c) 2022 shsecret contributors - MIT License
# SPDX-License-Identifier: MIT

"""Shamir Share generation."""

import re
import logging
from typing import List
from typing import NamedTuple

from . import sss
from . import sss_random
from . import common_types as ct

logger = logging.getLogger("shsecret.shamir")


# x=0 is the secret, so at most 255 distinct points remain for shares
MAX_SHARES = 255


class Scheme(NamedTuple):

    threshold : int
    num_shares: int


def validate_scheme(threshold: int, num_shares: int) -> None:
    if threshold < 1:
        raise ValueError(f"Invalid threshold={threshold}, must be at least 1")
    elif threshold > num_shares:
        raise ValueError(f"Invalid threshold={threshold}, must be <= num_shares={num_shares}")
    elif num_shares > MAX_SHARES:
        raise ValueError(f"Invalid num_shares={num_shares}, must be <= {MAX_SHARES}")


def parse_scheme(scheme_arg: str) -> Scheme:
    if not re.match(r"^\d+of\d+$", scheme_arg):
        errmsg = f"Invalid scheme '{scheme_arg}'. Try something like '3of5'"
        raise ValueError(errmsg)

    threshold, num_shares = map(int, scheme_arg.split("of"))
    validate_scheme(threshold, num_shares)
    return Scheme(threshold, num_shares)


def split_data(
    secret    : ct.Secret,
    threshold : int,
    num_shares: int,
    randbytes : sss_random.RandBytes = sss_random.urandom,
) -> List[ct.RawShare]:
    """Split secret into num_shares, any threshold of which can join it."""
    validate_scheme(threshold, num_shares)

    # The polynomial is defined by its value at threshold points:
    # the secret at x=0 and random values at x=1..threshold-1.
    in_points = list(range(threshold))
    in_values = [secret] + [randbytes(len(secret)) for _ in range(1, threshold)]
    assert all(len(val) == len(secret) for val in in_values)

    out_points = list(range(1, num_shares + 1))
    out_values = sss.transform_bytes(in_points, out_points, in_values)

    raw_shares = [ct.RawShare(x, data) for x, data in zip(out_points, out_values)]
    logger.debug(f"split {len(secret)} bytes into {num_shares} shares, threshold={threshold}")

    # make sure we only return shares that we can join again
    recovered_secret = join_data(raw_shares[-threshold:])
    if recovered_secret != secret:
        raise AssertionError("Invalid shares, could not recover secret")

    return raw_shares


def _validate_shares(raw_shares: ct.RawShares) -> None:
    if len(raw_shares) == 0:
        raise ValueError("Cannot join without shares")

    x_coords = [raw_share.x_coord for raw_share in raw_shares]
    for x in x_coords:
        if not 0 <= x < 256:
            raise ValueError(f"Invalid share with x={x}, must be in range 0..255")

    if len(set(x_coords)) != len(x_coords):
        raise ValueError(f"Invalid shares with duplicate x coordinates {sorted(x_coords)}")

    data_lens = {len(raw_share.data) for raw_share in raw_shares}
    if len(data_lens) > 1:
        raise ValueError(f"Invalid shares with different lengths {sorted(data_lens)}")


def join_data(raw_shares: ct.RawShares, at_x: ct.PointValue = 0) -> bytes:
    """Interpolate shares at at_x.

    With at_x=0 (the default) this recovers the secret, with any
    other value it recreates the share for that point. Note that
    the result is only correct if at least threshold shares are
    given, which cannot be detected here.
    """
    _validate_shares(raw_shares)
    if not 0 <= at_x < 256:
        raise ValueError(f"Invalid point x={at_x}, must be in range 0..255")

    in_points = [raw_share.x_coord for raw_share in raw_shares]
    in_values = [raw_share.data for raw_share in raw_shares]
    result, = sss.transform_bytes(in_points, [at_x], in_values)
    return result
