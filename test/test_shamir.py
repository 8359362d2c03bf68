import os
import random
import itertools

import pytest

import shsecret.shamir
import shsecret.sss_random
from shsecret.shamir import *
from shsecret.common_types import RawShare


def test_split():
    secret     = os.urandom(32)
    raw_shares = split_data(secret, threshold=2, num_shares=3)
    assert len(raw_shares) == 3
    assert [raw_share.x_coord for raw_share in raw_shares] == [1, 2, 3]
    assert all(len(raw_share.data) == len(secret) for raw_share in raw_shares)
    assert all(raw_share.data != secret for raw_share in raw_shares)


def test_join():
    secret     = os.urandom(32)
    raw_shares = split_data(secret, threshold=3, num_shares=5)

    for combo in itertools.combinations(raw_shares, 3):
        assert join_data(list(combo)) == secret

    shuffled = list(raw_shares)
    random.shuffle(shuffled)
    assert join_data(shuffled) == secret


def test_join_insufficient_shares():
    secret     = b"\x00" * 8 + b"\xff" * 8
    raw_shares = split_data(secret, threshold=3, num_shares=5)
    assert join_data(raw_shares[:2]) != secret


def test_recreate_share():
    secret     = os.urandom(20)
    raw_shares = split_data(secret, threshold=2, num_shares=4)
    lost_share = raw_shares[3]
    recreated  = join_data(raw_shares[:2], at_x=lost_share.x_coord)
    assert recreated == lost_share.data


EDGE_CASES = [
    b"",
    b"\x00",
    b"\x00" * 16,
    b"\xff" * 16,
    bytes(range(256)),
]


@pytest.mark.parametrize("secret", EDGE_CASES)
def test_shamir_edgecases(secret):
    raw_shares = split_data(secret, threshold=7, num_shares=11)
    assert join_data(raw_shares[2:9]) == secret


def test_custom_randbytes():
    secret = b"plain"

    def const_randbytes(size):
        assert size == len(secret)
        return secret

    raw_shares = split_data(secret, threshold=3, num_shares=4, randbytes=const_randbytes)
    # same value at x=0, 1 and 2, so the polynomial is constant
    assert all(raw_share.data == secret for raw_share in raw_shares)


def test_debug_random(monkeypatch):
    monkeypatch.setenv('SHSECRET_DEBUG_RANDOM', 'DANGER')
    assert shsecret.sss_random.is_debug_random()

    shsecret.sss_random.reset_debug_random()
    with pytest.warns(UserWarning):
        data1 = shsecret.sss_random.urandom(40)
    shsecret.sss_random.reset_debug_random()
    with pytest.warns(UserWarning):
        data2 = shsecret.sss_random.urandom(40)
        data3 = shsecret.sss_random.urandom(40)

    assert len(data1) == 40
    assert data1 == data2
    assert data1 != data3


def test_debug_random_reset():
    debug_rand = shsecret.sss_random.DebugRandom()
    data1      = debug_rand.randbytes(40)
    data2      = debug_rand.randbytes(40)
    debug_rand.reset()
    assert debug_rand.randbytes(40) == data1
    assert data1 != data2


def test_urandom(monkeypatch):
    monkeypatch.delenv('SHSECRET_DEBUG_RANDOM', raising=False)
    assert not shsecret.sss_random.is_debug_random()
    assert len(shsecret.sss_random.urandom(12)) == 12


@pytest.mark.parametrize("threshold, num_shares", [(0, 3), (4, 3), (2, 256)])
def test_split_invalid_scheme(threshold, num_shares):
    with pytest.raises(ValueError):
        split_data(b"secret", threshold=threshold, num_shares=num_shares)


def test_join_invalid():
    with pytest.raises(ValueError, match="without shares"):
        join_data([])

    with pytest.raises(ValueError, match="duplicate"):
        join_data([RawShare(1, b"ab"), RawShare(1, b"cd")])

    with pytest.raises(ValueError, match="different lengths"):
        join_data([RawShare(1, b"ab"), RawShare(2, b"cde")])

    with pytest.raises(ValueError, match="range"):
        join_data([RawShare(256, b"ab")])

    with pytest.raises(ValueError, match="range"):
        join_data([RawShare(1, b"ab")], at_x=300)


def test_parse_scheme():
    assert parse_scheme("1of2"    ) == Scheme(1, 2)
    assert parse_scheme("3of5"    ) == Scheme(3, 5)
    assert parse_scheme("11of13"  ) == Scheme(11, 13)
    assert parse_scheme("200of255") == Scheme(200, 255)

    for invalid in ["invalid", "11of5", "0of3", "3of256", "3 of 5"]:
        with pytest.raises(ValueError):
            parse_scheme(invalid)
