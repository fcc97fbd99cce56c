# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random

import pytest

from rsaparams import bigint
from rsaparams.errors import EncodingError

rnd = random.Random(20250101)
sample_blobs = [b"", b"\x00", b"\x00\x00", b"\x80", b"\x00\x80", b"\x00\x00\x7f", b"\x01\x00", b"\xff" * 9] + [
    b"\x00" * rnd.randrange(3) + rnd.randbytes(rnd.randrange(1, 40)) for _ in range(25)
]


@pytest.mark.parametrize("data,expected", [
    (b"", b"\x00"),
    (b"\x00", b"\x00"),
    (b"\x00\x00\x00", b"\x00"),
    (b"\x0c\xa1", b"\x0c\xa1"),
    (b"\x00\x00\x0c\xa1", b"\x0c\xa1"),
    (b"\x00\x80", b"\x80"),
    (b"\x01\x00", b"\x01\x00"),
])
def test_normalize_unsigned(data, expected):
    assert bigint.normalize(data) == expected


@pytest.mark.parametrize("data,expected", [
    (b"\x80", b"\x00\x80"),
    (b"\x00\x00\x80", b"\x00\x80"),
    (b"\x00\x7f", b"\x7f"),
    (b"\x00", b"\x00"),
    (b"\xff\xff", b"\x00\xff\xff"),
])
def test_normalize_signed(data, expected):
    assert bigint.normalize(data, signed=True) == expected


@pytest.mark.parametrize("data", sample_blobs)
@pytest.mark.parametrize("signed", [True, False])
def test_normalize_idempotent(data, signed):
    once = bigint.normalize(data, signed)
    assert bigint.normalize(once, signed) == once
    assert bigint.to_int(once) == bigint.to_int(data)


def test_normalize_accepts_bytearray():
    assert bigint.normalize(bytearray(b"\x00\x05")) == b"\x05"


@pytest.mark.parametrize("data,width,expected", [
    (b"\x01", 4, b"\x00\x00\x00\x01"),
    (b"\x00\x00\x01\x02", 2, b"\x01\x02"),
    (b"\x00", 3, b"\x00\x00\x00"),
    (b"", 1, b"\x00"),
    (b"\xab\xcd", 2, b"\xab\xcd"),
])
def test_to_fixed_width(data, width, expected):
    assert bigint.to_fixed_width(data, width) == expected


def test_to_fixed_width_overflow():
    with pytest.raises(EncodingError, match="does not fit a 2-byte field"):
        bigint.to_fixed_width(b"\x01\x00\x00", 2)


@pytest.mark.parametrize("value", [0, 1, 127, 128, 255, 256, 65537, 2**1024 - 1])
def test_int_conversions(value):
    data = bigint.from_int(value)
    assert data == bigint.normalize(data)
    assert bigint.to_int(data) == value


def test_from_int_negative():
    with pytest.raises(EncodingError):
        bigint.from_int(-1)


@pytest.mark.parametrize("data", [3233, 0, "0ca1", None, [12, 161]])
def test_rejects_non_bytes(data):
    with pytest.raises(TypeError, match="byte string"):
        bigint.normalize(data)
    with pytest.raises(TypeError):
        bigint.to_fixed_width(data, 4)


def test_accepts_memoryview():
    assert bigint.normalize(memoryview(b"\x00\x0c\xa1")) == b"\x0c\xa1"
