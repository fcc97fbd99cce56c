"""Canonical unsigned big-endian byte encodings of integers.

Typical usage example:

    normalize(b"\x00\x00\x0c\xa1")  # b"\x0c\xa1"
    normalize(b"\x80", signed=True)  # b"\x00\x80"
    to_fixed_width(b"\x01", 4)  # b"\x00\x00\x00\x01"
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsaparams.errors import EncodingError


def _magnitude(data: bytes) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected a big-endian byte string, got {type(data).__name__}.")
    return bytes(data)


def normalize(data: bytes, signed: bool = False) -> bytes:
    """Strips superfluous leading zero bytes from an unsigned big-endian value.

    Args:
        data: The big-endian magnitude. May carry any number of leading zero bytes.
        signed: Whether the target is a two's-complement field (ASN.1 INTEGER). If so, exactly one leading zero byte
            is kept when the most significant bit of the remaining bytes is set.

    Returns:
        The minimal representation. Zero is represented as a single zero byte.

    Raises:
        TypeError: If `data` is not bytes-like, e.g. a plain integer.
    """
    stripped = _magnitude(data).lstrip(b"\x00") or b"\x00"
    if signed and stripped[0] & 0x80:
        return b"\x00" + stripped
    return stripped


def to_fixed_width(data: bytes, width: int) -> bytes:
    """Left-pads an unsigned big-endian value with zero bytes to exactly `width` bytes.

    Args:
        data: The big-endian magnitude.
        width: The required field width in bytes.

    Returns:
        The padded value.

    Raises:
        EncodingError: If the minimal value is longer than `width`.
    """
    stripped = _magnitude(data).lstrip(b"\x00")
    if len(stripped) > width:
        raise EncodingError(f"Value of {len(stripped)} bytes does not fit a {width}-byte field.")
    return stripped.rjust(width, b"\x00")


def to_int(data: bytes) -> int:
    """Reads an unsigned big-endian value."""
    return int.from_bytes(data, byteorder="big", signed=False)


def from_int(value: int) -> bytes:
    """Writes a non-negative integer in its minimal unsigned big-endian form.

    Raises:
        EncodingError: If `value` is negative.
    """
    if value < 0:
        raise EncodingError("Negative values have no unsigned encoding.")
    return value.to_bytes(max(1, (value.bit_length() + 7) // 8), byteorder="big", signed=False)
