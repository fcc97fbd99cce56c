"""The platform-independent RSA key parameter model.

A key is one of three immutable variants: `PublicOnly`, `PrivatePartial` (private exponent known, factors unknown)
and `PrivateFull` (all CRT components). Every field holds the minimal unsigned big-endian encoding of its integer,
normalized on construction, so two values describing the same key always compare equal.

Typical usage example:

    pub = PublicOnly.from_ints(modulus=3233, public_exponent=17)
    partial = PrivatePartial.from_ints(modulus=3233, public_exponent=17, private_exponent=2753)
    match key:
        case PublicOnly(): ...
        case PrivatePartial(): ...
        case PrivateFull(): ...
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import dataclasses
import math
import typing

from rsaparams import bigint
from rsaparams.errors import InconsistentKeyData


class _KeyFields:
    """Integer views shared by all parameter variants."""

    def __post_init__(self) -> None:
        for field in dataclasses.fields(self):
            object.__setattr__(self, field.name, bigint.normalize(getattr(self, field.name)))

    @classmethod
    def from_ints(cls, **values: int) -> typing.Self:
        """Builds the variant from plain integers keyed by field name."""
        return cls(**{name: bigint.from_int(value) for name, value in values.items()})

    def as_ints(self) -> dict[str, int]:
        """Returns every field as an integer, keyed by field name."""
        return {field.name: bigint.to_int(getattr(self, field.name)) for field in dataclasses.fields(self)}

    @property
    def key_size(self) -> int:
        """Bit length of the modulus."""
        return bigint.to_int(self.modulus).bit_length()


@dataclasses.dataclass(frozen=True)
class PublicOnly(_KeyFields):
    modulus: bytes
    public_exponent: bytes


@dataclasses.dataclass(frozen=True)
class PrivatePartial(_KeyFields):
    """A private key whose prime factors are not known yet."""
    modulus: bytes
    public_exponent: bytes
    private_exponent: bytes


@dataclasses.dataclass(frozen=True)
class PrivateFull(_KeyFields):
    """A private key with all Chinese Remainder Theorem components.

    Construction verifies that the components agree with each other.

    Attributes:
        modulus: n = p * q.
        public_exponent: e.
        private_exponent: d, with e * d = 1 mod lcm(p - 1, q - 1).
        prime_p: First prime factor.
        prime_q: Second prime factor.
        exponent_p: d mod (p - 1).
        exponent_q: d mod (q - 1).
        coefficient: Inverse of q modulo p.

    Raises:
        InconsistentKeyData: If any of the invariants above does not hold.
    """
    modulus: bytes
    public_exponent: bytes
    private_exponent: bytes
    prime_p: bytes
    prime_q: bytes
    exponent_p: bytes
    exponent_q: bytes
    coefficient: bytes

    def __post_init__(self) -> None:
        super().__post_init__()
        check_consistency(**self.as_ints())


RsaParameters: typing.TypeAlias = PublicOnly | PrivatePartial | PrivateFull


def check_consistency(modulus: int, public_exponent: int, private_exponent: int, prime_p: int, prime_q: int,
                      exponent_p: int, exponent_q: int, coefficient: int) -> None:
    """Verifies the relations between the fields of a full private key.

    Raises:
        InconsistentKeyData: On the first relation that does not hold.
    """
    if prime_p < 2 or prime_q < 2 or prime_p * prime_q != modulus:
        raise InconsistentKeyData("Modulus does not match the primes.")
    if public_exponent * private_exponent % math.lcm(prime_p - 1, prime_q - 1) != 1:
        raise InconsistentKeyData("Private exponent does not match the public exponent and primes.")
    if exponent_p != private_exponent % (prime_p - 1) or exponent_q != private_exponent % (prime_q - 1):
        raise InconsistentKeyData("CRT exponents do not match the private exponent.")
    if coefficient * prime_q % prime_p != 1:
        raise InconsistentKeyData("CRT coefficient is not the inverse of q modulo p.")


def public_part(params: RsaParameters) -> PublicOnly:
    """Returns the public view of any parameter variant."""
    match params:
        case PublicOnly():
            return params
        case PrivatePartial() | PrivateFull():
            return PublicOnly(params.modulus, params.public_exponent)
        case _:
            typing.assert_never(params)


def variant_name(params: RsaParameters) -> str:
    match params:
        case PublicOnly():
            return "public"
        case PrivatePartial():
            return "private (partial)"
        case PrivateFull():
            return "private (full)"
        case _:
            typing.assert_never(params)
