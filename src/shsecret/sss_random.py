# This file is part of the shsecret project
#
# Copyright (c) 2022 shsecret contributors - MIT License
# SPDX-License-Identifier: MIT

"""Source of random data for the coefficient buffers.

Shares are only secure if the coefficients are cryptographically
secure random data.
"""

import os
import hashlib
import warnings
from typing import Protocol

DEBUG_WARN_MSG = "Warning, shsecret using debug random! This should only happen when debugging or testing."


class RandBytes(Protocol):
    def __call__(self, size: int) -> bytes:
        ...


def is_debug_random() -> bool:
    return os.getenv('SHSECRET_DEBUG_RANDOM') == 'DANGER'


class DebugRandom:

    _counter: int

    def __init__(self) -> None:
        self._counter = 0

    def reset(self) -> None:
        self._counter = 0

    def randbytes(self, size: int) -> bytes:
        # deterministic, but each call returns different data
        result = b""
        while len(result) < size:
            self._counter += 1
            result += hashlib.sha256(self._counter.to_bytes(8, "big")).digest()
        return result[:size]


_debug_rand = DebugRandom()


def reset_debug_random() -> None:
    _debug_rand.reset()


def urandom(size: int) -> bytes:
    if is_debug_random():
        # https://xkcd.com/221/
        warnings.warn(DEBUG_WARN_MSG)
        return _debug_rand.randbytes(size)
    else:
        return os.urandom(size)
