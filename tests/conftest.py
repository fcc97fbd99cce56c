# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from cryptography.hazmat.primitives.asymmetric import rsa
import pytest

from rsaparams.params import PrivateFull
from rsaparams.params import PrivatePartial
from rsaparams.params import PublicOnly

# 1024-bit test key shared with the Mozilla PSM unit tests (pykey.py, "rsa1024"). p is the larger prime.
RSA1024 = {
    "modulus": int(
        "00d3a97440101eba8c5df9503e6f935eb52ffeb3ebe9d0dc5cace26f973c"
        "a94cbc0d9c31d66c0c013bce9c82d0d480328df05fb6bcd7990a5312ddae"
        "6152ad6ee61c8c1bdd8663c68bd36224a9882ae78e89f556dfdbe6f51da6"
        "112cbfc27c8a49336b41afdb75321b52b24a7344d1348e646351a551c757"
        "1ccda0b8fe35f61a75", 16),
    "public_exponent": 65537,
    "private_exponent": int(
        "5b6708e185548fc07ff062dba3792363e106ff9177d60ee3227162391024"
        "1813f958a318f26db8b6a801646863ebbc69190d6c2f5e7723433e99666d"
        "76b3987892cd568f1f18451e8dc05477c0607ee348380ebb7f4c98d0c036"
        "a0260bc67b2dab46cbaa4ce87636d839d8fddcbae2da3e02e8009a21225d"
        "d7e47aff2f82699d", 16),
    "prime_p": int(
        "00fcdee570323e8fc399dbfc63d8c1569546fb3cd6886c628668ab1e1d0f"
        "ca71058febdf76d702970ad6579d80ac2f9521075e40ef8f3f39983bd819"
        "07e898bad3", 16),
    "prime_q": int(
        "00d64801c955b4eb75fbae230faa8b28c9cc5e258be63747ff5ac8d2af25"
        "3e9f6d6ce03ea2eb13ae0eb32572feb848c32ca00743635374338fedacd8"
        "c5885f7897", 16),
    "exponent_p": int(
        "76c0526d5b1b28368a75d5d42a01b9a086e20b9310241e2cd2d0b166a278"
        "c694ff1e9d25d9193d47789b52bb0fa194de1af0b77c09007f12afdfeef9"
        "58d108c3", 16),
    "exponent_q": int(
        "008a41898d8b14217c4d782cbd15ef95d0a660f45ed09a4884f4e170367b"
        "946d2f20398b907896890e88fe17b54bd7febe133ebc7720c86fe0649cca"
        "7ca121e05f", 16),
    "coefficient": int(
        "22db133445f7442ea2a0f582031ee214ff5f661972986f172651d8d6b4ec"
        "3163e99bff1c82fe58ec3d075c6d8f26f277020edb77c3ba821b9ba3ae18"
        "ff8cb2cb", 16),
}

# Textbook key: n = 61 * 53, e = 17, d = 2753.
SMALL = {
    "modulus": 3233,
    "public_exponent": 17,
    "private_exponent": 2753,
    "prime_p": 61,
    "prime_q": 53,
    "exponent_p": 2753 % 60,
    "exponent_q": 2753 % 52,
    "coefficient": pow(53, -1, 61),
}


def to_crypto(values: dict[str, int]) -> rsa.RSAPrivateKey:
    """Builds a `cryptography` key from integer fields."""
    pub = rsa.RSAPublicNumbers(values["public_exponent"], values["modulus"])
    return rsa.RSAPrivateNumbers(values["prime_p"], values["prime_q"], values["private_exponent"],
                                 values["exponent_p"], values["exponent_q"], values["coefficient"],
                                 pub).private_key()


def from_crypto(key: rsa.RSAPrivateKey) -> PrivateFull:
    privs = key.private_numbers()
    pubs = privs.public_numbers
    return PrivateFull.from_ints(modulus=pubs.n,
                                 public_exponent=pubs.e,
                                 private_exponent=privs.d,
                                 prime_p=privs.p,
                                 prime_q=privs.q,
                                 exponent_p=privs.dmp1,
                                 exponent_q=privs.dmq1,
                                 coefficient=privs.iqmp)


@pytest.fixture
def rsa1024() -> dict[str, int]:
    return dict(RSA1024)


@pytest.fixture
def rsa1024_full() -> PrivateFull:
    return PrivateFull.from_ints(**RSA1024)


@pytest.fixture
def rsa1024_partial() -> PrivatePartial:
    return PrivatePartial.from_ints(modulus=RSA1024["modulus"],
                                    public_exponent=RSA1024["public_exponent"],
                                    private_exponent=RSA1024["private_exponent"])


@pytest.fixture
def small() -> dict[str, int]:
    return dict(SMALL)


@pytest.fixture
def small_full() -> PrivateFull:
    return PrivateFull.from_ints(**SMALL)


@pytest.fixture
def small_public() -> PublicOnly:
    return PublicOnly.from_ints(modulus=3233, public_exponent=17)


@pytest.fixture(scope="session")
def crypto_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def generated_full(crypto_key) -> PrivateFull:
    return from_crypto(crypto_key)


@pytest.fixture(scope="session")
def rsa1024_crypto() -> rsa.RSAPrivateKey:
    return to_crypto(RSA1024)
