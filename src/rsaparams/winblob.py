"""Formatters for the Windows key blobs: CryptoAPI PUBLICKEYBLOB/PRIVATEKEYBLOB and CNG BCRYPT_RSAKEY_BLOB.

CryptoAPI blobs start with a BLOBHEADER and an RSAPUBKEY and store every number little-endian in a fixed width
derived from the key size: the modulus and private exponent take ceil(bits / 8) bytes, the five CRT fields
ceil(bits / 16) bytes each. This is what `openssl rsa -outform MSBLOB` reads and writes.

CNG blobs start with a BCRYPT_RSAKEY_BLOB header that states the width of each field, followed by big-endian
numbers. Private keys are written as full private blobs (RSA3); plain private blobs (RSA2) are read as well.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math
import struct

from rsaparams import bigint
from rsaparams.errors import EncodingError
from rsaparams.errors import InconsistentKeyData
from rsaparams.errors import MalformedEncoding
from rsaparams.errors import UnexpectedAlgorithm
from rsaparams.errors import UnsupportedEncoding
from rsaparams.formatter import KeyFormatter
from rsaparams.formatter import require_full
from rsaparams.params import PrivateFull
from rsaparams.params import public_part
from rsaparams.params import PublicOnly
from rsaparams.params import RsaParameters

PUBLICKEYBLOB = 0x06
PRIVATEKEYBLOB = 0x07
CUR_BLOB_VERSION = 0x02
CALG_RSA_SIGN = 0x2400
CALG_RSA_KEYX = 0xa400
CAPI_MAGIC_PUBLIC = b"RSA1"
CAPI_MAGIC_PRIVATE = b"RSA2"

BCRYPT_RSAPUBLIC_MAGIC = 0x31415352
BCRYPT_RSAPRIVATE_MAGIC = 0x32415352
BCRYPT_RSAFULLPRIVATE_MAGIC = 0x33415352

_CAPI_HEADER = struct.Struct("<BBHI4sII")
_BCRYPT_HEADER = struct.Struct("<6I")


def _le(data: bytes, width: int) -> bytes:
    return bigint.to_fixed_width(data, width)[::-1]


def _widths(bit_length: int) -> tuple[int, int]:
    return (bit_length + 7) // 8, (bit_length + 15) // 16


class _CapiFormatter(KeyFormatter):
    blob_type = PUBLICKEYBLOB
    magic = CAPI_MAGIC_PUBLIC

    def _header(self, key: RsaParameters) -> bytes:
        exponent = bigint.to_int(key.public_exponent)
        if exponent >> 32:
            raise EncodingError("CryptoAPI blobs hold public exponents of at most 32 bits.")
        return _CAPI_HEADER.pack(self.blob_type, CUR_BLOB_VERSION, 0, CALG_RSA_KEYX, self.magic, key.key_size,
                                 exponent)

    def _split(self, blob: bytes) -> tuple[int, int, list[bytes]]:
        """Validates the headers and cuts the payload into fields.

        Returns:
            Tuple of (bit length, public exponent, big-endian fields in blob order).
        """
        if len(blob) < _CAPI_HEADER.size:
            raise MalformedEncoding("Truncated CryptoAPI blob header.")
        blob_type, version, _, algorithm, magic, bits, exponent = _CAPI_HEADER.unpack_from(blob)
        if version != CUR_BLOB_VERSION:
            raise UnsupportedEncoding(f"Unsupported CryptoAPI blob version {version}.")
        if algorithm not in (CALG_RSA_KEYX, CALG_RSA_SIGN):
            raise UnexpectedAlgorithm(f"CryptoAPI algorithm {algorithm:#06x} is not RSA.")
        if blob_type != self.blob_type or magic != self.magic:
            raise MalformedEncoding(f"Not a CryptoAPI {self.name} blob.")
        if not bits:
            raise MalformedEncoding("CryptoAPI blob with zero key size.")
        size, half = _widths(bits)
        layout = [size] if self.blob_type == PUBLICKEYBLOB else [size] + [half] * 5 + [size]
        if len(blob) != _CAPI_HEADER.size + sum(layout):
            raise MalformedEncoding(f"CryptoAPI blob of {len(blob)} bytes does not match a {bits}-bit key.")
        fields = []
        offset = _CAPI_HEADER.size
        for width in layout:
            fields.append(blob[offset:offset + width][::-1])
            offset += width
        if bigint.to_int(fields[0]).bit_length() != bits:
            raise MalformedEncoding(f"CryptoAPI blob declares a {bits}-bit key but carries a different modulus.")
        return bits, exponent, fields


class CapiPublicFormatter(_CapiFormatter):
    """CryptoAPI PUBLICKEYBLOB. Encodes the public part of any variant."""
    name = "CAPI_PUB"

    def encode(self, params: RsaParameters) -> bytes:
        key = public_part(params)
        return self._header(key) + _le(key.modulus, _widths(key.key_size)[0])

    def decode(self, blob: bytes) -> PublicOnly:
        _, exponent, (modulus,) = self._split(blob)
        return PublicOnly(modulus, bigint.from_int(exponent))


class CapiPrivateFormatter(_CapiFormatter):
    """CryptoAPI PRIVATEKEYBLOB.

    Raises:
        EncodingError: When a prime is wider than half the modulus, which the fixed layout cannot hold.
    """
    name = "CAPI_PRIV"
    private = True
    blob_type = PRIVATEKEYBLOB
    magic = CAPI_MAGIC_PRIVATE

    def encode(self, params: RsaParameters) -> bytes:
        key = require_full(params, "CryptoAPI PRIVATEKEYBLOB")
        size, half = _widths(key.key_size)
        crt = (key.prime_p, key.prime_q, key.exponent_p, key.exponent_q, key.coefficient)
        return b"".join([self._header(key), _le(key.modulus, size)] + [_le(field, half) for field in crt] +
                        [_le(key.private_exponent, size)])

    def decode(self, blob: bytes) -> PrivateFull:
        _, exponent, (modulus, p, q, dp, dq, qinv, d) = self._split(blob)
        return PrivateFull(modulus, bigint.from_int(exponent), d, p, q, dp, dq, qinv)


class _BCryptFormatter(KeyFormatter):
    magics: tuple[int, ...] = (BCRYPT_RSAPUBLIC_MAGIC,)

    def _split(self, blob: bytes) -> tuple[int, list[bytes]]:
        """Validates the header and cuts the payload into fields.

        Returns:
            Tuple of (magic, big-endian fields in blob order).
        """
        if len(blob) < _BCRYPT_HEADER.size:
            raise MalformedEncoding("Truncated BCRYPT_RSAKEY_BLOB header.")
        magic, bits, cb_exponent, cb_modulus, cb_prime1, cb_prime2 = _BCRYPT_HEADER.unpack_from(blob)
        if magic not in (BCRYPT_RSAPUBLIC_MAGIC, BCRYPT_RSAPRIVATE_MAGIC, BCRYPT_RSAFULLPRIVATE_MAGIC):
            raise UnexpectedAlgorithm(f"BCrypt blob magic {magic:#010x} is not RSA.")
        if magic not in self.magics:
            raise MalformedEncoding(f"Not a BCrypt {self.name} blob.")
        if not bits or not cb_exponent or not cb_modulus:
            raise MalformedEncoding("BCrypt blob with empty modulus or exponent.")
        layout = [cb_exponent, cb_modulus]
        if magic == BCRYPT_RSAPUBLIC_MAGIC:
            if cb_prime1 or cb_prime2:
                raise MalformedEncoding("BCrypt public blob declares primes.")
        else:
            layout += [cb_prime1, cb_prime2]
        if magic == BCRYPT_RSAFULLPRIVATE_MAGIC:
            layout += [cb_prime1, cb_prime2, cb_prime1, cb_modulus]
        if len(blob) != _BCRYPT_HEADER.size + sum(layout):
            raise MalformedEncoding(f"BCrypt blob of {len(blob)} bytes does not match its header.")
        fields = []
        offset = _BCRYPT_HEADER.size
        for width in layout:
            fields.append(blob[offset:offset + width])
            offset += width
        if bigint.to_int(fields[1]).bit_length() != bits:
            raise MalformedEncoding(f"BCrypt blob declares a {bits}-bit key but carries a different modulus.")
        return magic, fields


class BCryptPublicFormatter(_BCryptFormatter):
    """CNG BCRYPT_RSAPUBLIC_BLOB. Encodes the public part of any variant."""
    name = "BCRYPT_PUB"

    def encode(self, params: RsaParameters) -> bytes:
        key = public_part(params)
        header = _BCRYPT_HEADER.pack(BCRYPT_RSAPUBLIC_MAGIC, key.key_size, len(key.public_exponent),
                                     len(key.modulus), 0, 0)
        return header + key.public_exponent + key.modulus

    def decode(self, blob: bytes) -> PublicOnly:
        _, (exponent, modulus) = self._split(blob)
        return PublicOnly(modulus, exponent)


class BCryptPrivateFormatter(_BCryptFormatter):
    """CNG BCRYPT_RSAFULLPRIVATE_BLOB, reading BCRYPT_RSAPRIVATE_BLOB too.

    Plain private blobs carry only the primes; the private exponent is recomputed as the inverse of e modulo
    lcm(p - 1, q - 1).
    """
    name = "BCRYPT_PRIV"
    private = True
    magics = (BCRYPT_RSAPRIVATE_MAGIC, BCRYPT_RSAFULLPRIVATE_MAGIC)

    def encode(self, params: RsaParameters) -> bytes:
        key = require_full(params, "BCRYPT_RSAFULLPRIVATE_BLOB")
        cb_prime1, cb_prime2 = len(key.prime_p), len(key.prime_q)
        header = _BCRYPT_HEADER.pack(BCRYPT_RSAFULLPRIVATE_MAGIC, key.key_size, len(key.public_exponent),
                                     len(key.modulus), cb_prime1, cb_prime2)
        return b"".join((header, key.public_exponent, key.modulus, key.prime_p, key.prime_q,
                         bigint.to_fixed_width(key.exponent_p, cb_prime1),
                         bigint.to_fixed_width(key.exponent_q, cb_prime2),
                         bigint.to_fixed_width(key.coefficient, cb_prime1),
                         bigint.to_fixed_width(key.private_exponent, len(key.modulus))))

    def decode(self, blob: bytes) -> PrivateFull:
        magic, fields = self._split(blob)
        if magic == BCRYPT_RSAFULLPRIVATE_MAGIC:
            exponent, modulus, p, q, dp, dq, qinv, d = fields
            return PrivateFull(modulus, exponent, d, p, q, dp, dq, qinv)
        exponent, modulus, p, q = fields
        e, ip, iq = bigint.to_int(exponent), bigint.to_int(p), bigint.to_int(q)
        if ip < 2 or iq < 2:
            raise InconsistentKeyData("BCrypt private blob with invalid primes.")
        try:
            d = pow(e, -1, math.lcm(ip - 1, iq - 1))
            qinv = pow(iq, -1, ip)
        except ValueError as exc:
            raise InconsistentKeyData("BCrypt private blob primes do not admit a private exponent.") from exc
        return PrivateFull.from_ints(modulus=bigint.to_int(modulus),
                                     public_exponent=e,
                                     private_exponent=d,
                                     prime_p=ip,
                                     prime_q=iq,
                                     exponent_p=d % (ip - 1),
                                     exponent_q=d % (iq - 1),
                                     coefficient=qinv)


CAPI_PUBLIC = CapiPublicFormatter()
CAPI_PRIVATE = CapiPrivateFormatter()
BCRYPT_PUBLIC = BCryptPublicFormatter()
BCRYPT_PRIVATE = BCryptPrivateFormatter()
