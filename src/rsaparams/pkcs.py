"""DER formatters for PKCS#1, PKCS#8 and X.509 SubjectPublicKeyInfo RSA keys.

    RSAPrivateKey        ::= SEQUENCE { version, n, e, d, p, q, dp, dq, qInv }   (RFC 8017)
    RSAPublicKey         ::= SEQUENCE { n, e }                                   (RFC 8017)
    PrivateKeyInfo       ::= SEQUENCE { version, AlgorithmIdentifier, OCTET STRING RSAPrivateKey }   (RFC 5208)
    SubjectPublicKeyInfo ::= SEQUENCE { AlgorithmIdentifier, BIT STRING RSAPublicKey }               (RFC 5280)

Typical usage example:

    blob = PKCS8.encode(params)
    params = PKCS8.decode(blob)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from pyasn1_modules import rfc8017

from rsaparams import der
from rsaparams.errors import MalformedEncoding
from rsaparams.errors import UnexpectedAlgorithm
from rsaparams.errors import UnsupportedEncoding
from rsaparams.formatter import KeyFormatter
from rsaparams.formatter import require_full
from rsaparams.params import PrivateFull
from rsaparams.params import PrivatePartial
from rsaparams.params import public_part
from rsaparams.params import PublicOnly
from rsaparams.params import RsaParameters

RSA_ENCRYPTION_OID = str(rfc8017.rsaEncryption)

# Context-specific constructed [0], the optional PKCS#8 attributes.
_ATTRIBUTES_TAG = 0xa0


def write_algorithm() -> bytes:
    return der.write_sequence([der.write_object_identifier(RSA_ENCRYPTION_OID), der.write_null()])


def read_algorithm(node: der.Node) -> None:
    """Checks that an AlgorithmIdentifier names rsaEncryption, with NULL or absent parameters.

    Raises:
        UnexpectedAlgorithm: If the identifier names any other algorithm.
    """
    der.expect_tag(node, der.SEQUENCE)
    children = der.read_nodes(node.content)
    if not children or len(children) > 2:
        raise MalformedEncoding("AlgorithmIdentifier must hold an OID and optional parameters.")
    oid = der.read_object_identifier(children[0])
    if oid != RSA_ENCRYPTION_OID:
        raise UnexpectedAlgorithm(f"Algorithm {oid} is not rsaEncryption ({RSA_ENCRYPTION_OID}).")
    if len(children) == 2:
        der.read_null(children[1])


def read_version(node: der.Node, what: str) -> None:
    if der.read_integer(node) != b"\x00":
        raise UnsupportedEncoding(f"Unsupported {what} version.")


class Pkcs1PrivateFormatter(KeyFormatter):
    """PKCS#1 RSAPrivateKey.

    Encoding needs a `PrivateFull`. Decoding tolerates blobs whose five CRT fields are all zero, as written by some
    tools for keys without known factors, and returns a `PrivatePartial` for them.
    """
    name = "PKCS1_PRIV"
    private = True

    def encode(self, params: RsaParameters) -> bytes:
        key = require_full(params, "PKCS#1 RSAPrivateKey")
        fields = (key.modulus, key.public_exponent, key.private_exponent, key.prime_p, key.prime_q, key.exponent_p,
                  key.exponent_q, key.coefficient)
        return der.write_sequence([der.write_integer(b"\x00")] + [der.write_integer(field) for field in fields])

    def decode(self, blob: bytes) -> RsaParameters:
        nodes = der.read_sequence(blob)
        if not nodes:
            raise MalformedEncoding("Empty RSAPrivateKey.")
        # Multi-prime keys (version 1) carry an extra otherPrimeInfos element.
        read_version(nodes[0], "RSAPrivateKey (multi-prime keys are not supported)")
        if len(nodes) != 9:
            raise MalformedEncoding(f"RSAPrivateKey must hold 9 INTEGERs, found {len(nodes)}.")
        values = [der.read_integer(node) for node in nodes[1:]]
        if all(value == b"\x00" for value in values[3:]):
            return PrivatePartial(*values[:3])
        return PrivateFull(*values)


class Pkcs1PublicFormatter(KeyFormatter):
    """PKCS#1 RSAPublicKey. Encodes the public part of any variant."""
    name = "PKCS1_PUB"

    def encode(self, params: RsaParameters) -> bytes:
        key = public_part(params)
        return der.write_sequence([der.write_integer(key.modulus), der.write_integer(key.public_exponent)])

    def decode(self, blob: bytes) -> PublicOnly:
        nodes = der.read_sequence(blob)
        if len(nodes) != 2:
            raise MalformedEncoding(f"RSAPublicKey must hold 2 INTEGERs, found {len(nodes)}.")
        return PublicOnly(der.read_integer(nodes[0]), der.read_integer(nodes[1]))


class Pkcs8Formatter(KeyFormatter):
    """PKCS#8 PrivateKeyInfo wrapping a PKCS#1 RSAPrivateKey."""
    name = "PKCS8"
    private = True

    def encode(self, params: RsaParameters) -> bytes:
        inner = PKCS1_PRIVATE.encode(params)
        return der.write_sequence([der.write_integer(b"\x00"), write_algorithm(), der.write_octet_string(inner)])

    def decode(self, blob: bytes) -> RsaParameters:
        nodes = der.read_sequence(blob)
        if len(nodes) == 4 and nodes[3].tag == _ATTRIBUTES_TAG:
            nodes = nodes[:3]
        if len(nodes) != 3:
            raise MalformedEncoding(f"PrivateKeyInfo must hold 3 elements, found {len(nodes)}.")
        read_version(nodes[0], "PrivateKeyInfo")
        read_algorithm(nodes[1])
        return PKCS1_PRIVATE.decode(der.read_octet_string(nodes[2]))


class X509SpkiFormatter(KeyFormatter):
    """X.509 SubjectPublicKeyInfo wrapping a PKCS#1 RSAPublicKey."""
    name = "X509_SPKI"

    def encode(self, params: RsaParameters) -> bytes:
        return der.write_sequence([write_algorithm(), der.write_bit_string(PKCS1_PUBLIC.encode(params))])

    def decode(self, blob: bytes) -> PublicOnly:
        nodes = der.read_sequence(blob)
        if len(nodes) != 2:
            raise MalformedEncoding(f"SubjectPublicKeyInfo must hold 2 elements, found {len(nodes)}.")
        read_algorithm(nodes[0])
        return PKCS1_PUBLIC.decode(der.read_bit_string(nodes[1]))


PKCS1_PRIVATE = Pkcs1PrivateFormatter()
PKCS1_PUBLIC = Pkcs1PublicFormatter()
PKCS8 = Pkcs8Formatter()
X509_SPKI = X509SpkiFormatter()
