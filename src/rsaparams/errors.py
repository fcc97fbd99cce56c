"""Exception taxonomy for key encoding, decoding and completion.

Every error raised by the package derives from `RsaParamsError`, which is itself a `ValueError`, so callers can
catch the whole family or a single kind. Messages never carry key material.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RsaParamsError(ValueError):
    """Base class of all key parameter errors."""


class MalformedEncoding(RsaParamsError):
    """Structural violation in an encoded blob: bad tag, bad length, truncated buffer or trailing bytes."""


class UnsupportedEncoding(RsaParamsError):
    """Valid but unsupported encoding, such as BER indefinite lengths or multi-prime keys."""


class UnexpectedAlgorithm(RsaParamsError):
    """The blob is tagged with an algorithm other than RSA encryption."""


class UnsupportedBlobType(RsaParamsError):
    """No formatter is registered for the requested blob type."""


class IncompleteKeyData(RsaParamsError):
    """Private fields are required but absent."""


class InconsistentKeyData(RsaParamsError):
    """Key fields are present but do not agree with each other."""


class FactorizationFailed(RsaParamsError):
    """The modulus could not be factored from the exponents within the attempt bound."""


class EncodingError(RsaParamsError):
    """A value does not fit the field it is written to."""


class UnsupportedKeyParameters(RsaParamsError):
    """Key generation was asked for a size or public exponent the host library cannot produce."""
