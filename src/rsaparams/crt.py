"""Recovery of the prime factors and CRT components from an exposed private exponent.

Knowing n, e and d is equivalent to knowing the factorization of n: k = e * d - 1 is a multiple of lcm(p - 1, q - 1),
so for a random base g the sequence g^t, g^2t, ..., g^k (with k = 2^s * t, t odd) reaches 1 mod n, and with
probability at least one half it passes through a non-trivial square root of 1 on the way. Such a root x splits n
as gcd(x - 1, n). See Handbook of Applied Cryptography, 8.2.2 (i).

Typical usage example:

    p, q, dp, dq, qinv = complete(n, e, d)
    p, q, dp, dq, qinv = complete(n, e, d, rng=random.Random(4))  # reproducible
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import random
import secrets
from typing import NamedTuple

from rsaparams.errors import FactorizationFailed
from rsaparams.errors import InconsistentKeyData

MAX_ATTEMPTS: int = 100

logger = logging.getLogger(__name__)


class CrtComponents(NamedTuple):
    """The five private-key fields derived from the factorization, with p > q."""
    p: int
    q: int
    dp: int
    dq: int
    qinv: int


def _split(n: int, g: int, s: int, t: int) -> int | None:
    """Attempts to split `n` with base `g`.

    Returns:
        A non-trivial factor of `n`, or None if this base does not reveal one.
    """
    shared = math.gcd(g, n)
    if shared > 1:
        return shared
    x = pow(g, t, n)
    if x == 1 or x == n - 1:
        return None
    for _ in range(s):
        y = pow(x, 2, n)
        if y == 1:
            return math.gcd(x - 1, n)
        if y == n - 1:
            return None
        x = y
    return None


def factor_modulus(n: int,
                   e: int,
                   d: int,
                   rng: random.Random | None = None,
                   attempts: int = MAX_ATTEMPTS) -> tuple[int, int]:
    """Factors the modulus from the public and private exponents.

    Args:
        n: The modulus.
        e: The public exponent.
        d: The private exponent.
        rng: Source of trial bases. Defaults to a fresh `secrets.SystemRandom`.
        attempts: Number of random bases to try before giving up.

    Returns:
        The two prime factors, larger first.

    Raises:
        FactorizationFailed: If the input cannot hold a valid key, or no base split `n` within `attempts` tries.
    """
    if n < 6 or e < 1 or d < 1:
        raise FactorizationFailed("Modulus or exponents out of range.")
    k = e * d - 1
    if k <= 0 or k % 2:
        raise FactorizationFailed("e * d - 1 is not a positive even number.")
    s = (k & -k).bit_length() - 1
    t = k >> s
    if rng is None:
        rng = secrets.SystemRandom()
    for attempt in range(1, attempts + 1):
        factor = _split(n, rng.randrange(2, n), s, t)
        if factor is not None:
            logger.debug("Modulus factored after %d attempt(s).", attempt)
            other = n // factor
            return max(factor, other), min(factor, other)
    raise FactorizationFailed(f"No factor found after {attempts} attempts.")


def crt_components(d: int, p: int, q: int) -> CrtComponents:
    """Derives the CRT exponents and coefficient, ordering the primes so that p > q."""
    if p == q:
        raise InconsistentKeyData("The two primes must differ.")
    if p < q:
        p, q = q, p
    return CrtComponents(p, q, d % (p - 1), d % (q - 1), pow(q, -1, p))


def complete(n: int, e: int, d: int, rng: random.Random | None = None, attempts: int = MAX_ATTEMPTS) -> CrtComponents:
    """Computes every CRT component of a private key from n, e and d.

    Args:
        n: The modulus.
        e: The public exponent.
        d: The private exponent.
        rng: Source of trial bases. Defaults to a fresh `secrets.SystemRandom`.
        attempts: Number of random bases to try before giving up.

    Returns:
        The CRT components, larger prime first.
    """
    p, q = factor_modulus(n, e, d, rng, attempts)
    return crt_components(d, p, q)
