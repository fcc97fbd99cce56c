# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import dataclasses
import math

import pytest

from rsaparams.errors import InconsistentKeyData
from rsaparams.params import check_consistency
from rsaparams.params import PrivateFull
from rsaparams.params import PrivatePartial
from rsaparams.params import public_part
from rsaparams.params import PublicOnly
from rsaparams.params import variant_name


def test_fields_are_normalized():
    key = PublicOnly(b"\x00\x00\x0c\xa1", bytearray(b"\x00\x11"))
    assert key.modulus == b"\x0c\xa1"
    assert key.public_exponent == b"\x11"
    assert key == PublicOnly.from_ints(modulus=3233, public_exponent=17)


def test_integer_fields_rejected():
    with pytest.raises(TypeError):
        PublicOnly(3233, 17)
    with pytest.raises(TypeError):
        PrivatePartial(b"\x0c\xa1", b"\x11", 2753)


def test_values_are_immutable(small_public):
    with pytest.raises(dataclasses.FrozenInstanceError):
        small_public.modulus = b"\x01"


def test_as_ints_round_trip(rsa1024, rsa1024_full):
    assert rsa1024_full.as_ints() == rsa1024
    assert PrivateFull.from_ints(**rsa1024_full.as_ints()) == rsa1024_full


def test_key_size(rsa1024_full, rsa1024_partial, small_public):
    assert rsa1024_full.key_size == 1024
    assert rsa1024_partial.key_size == 1024
    assert small_public.key_size == 12


def test_full_key_invariants(rsa1024):
    n, e, d = rsa1024["modulus"], rsa1024["public_exponent"], rsa1024["private_exponent"]
    p, q = rsa1024["prime_p"], rsa1024["prime_q"]
    assert n == p * q
    assert e * d % math.lcm(p - 1, q - 1) == 1
    assert rsa1024["coefficient"] * q % p == 1


@pytest.mark.parametrize("field,delta,message", [
    ("modulus", 2, "Modulus"),
    ("private_exponent", 2, "Private exponent"),
    ("exponent_p", 1, "CRT exponents"),
    ("exponent_q", 1, "CRT exponents"),
    ("coefficient", 1, "coefficient"),
])
def test_inconsistent_full_key(small, field, delta, message):
    small[field] += delta
    with pytest.raises(InconsistentKeyData, match=message):
        PrivateFull.from_ints(**small)


def test_inconsistent_primes(small):
    with pytest.raises(InconsistentKeyData):
        check_consistency(**dict(small, prime_p=1, prime_q=3233))


def test_accepts_smaller_p(small):
    swapped = dict(small, prime_p=53, prime_q=61, exponent_p=2753 % 52, exponent_q=2753 % 60,
                   coefficient=pow(61, -1, 53))
    assert PrivateFull.from_ints(**swapped).as_ints()["prime_p"] == 53


def test_public_part(small_full, small_public):
    partial = PrivatePartial(small_full.modulus, small_full.public_exponent, small_full.private_exponent)
    for key in (small_full, partial, small_public):
        assert public_part(key) == small_public
    assert public_part(small_public) is small_public


def test_variant_name(small_full, small_public):
    partial = PrivatePartial.from_ints(modulus=3233, public_exponent=17, private_exponent=2753)
    assert variant_name(small_public) == "public"
    assert variant_name(partial) == "private (partial)"
    assert variant_name(small_full) == "private (full)"
