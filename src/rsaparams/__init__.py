"""Platform-independent RSA key parameters and their standard binary encodings.

Provides a canonical RSA key model, codecs for PKCS#1 (private and public), PKCS#8, X.509 SubjectPublicKeyInfo and
the Windows CryptoAPI/CNG key blobs, and completion of private keys known only by n, e and d into full CRT form.

Typical usage example:

    params = decode(blob, "PKCS8")
    spki = encode(params, "X509_SPKI")
    full = complete_private_key(PrivatePartial.from_ints(modulus=n, public_exponent=e, private_exponent=d))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsaparams.errors import EncodingError
from rsaparams.errors import FactorizationFailed
from rsaparams.errors import IncompleteKeyData
from rsaparams.errors import InconsistentKeyData
from rsaparams.errors import MalformedEncoding
from rsaparams.errors import RsaParamsError
from rsaparams.errors import UnexpectedAlgorithm
from rsaparams.errors import UnsupportedBlobType
from rsaparams.errors import UnsupportedEncoding
from rsaparams.errors import UnsupportedKeyParameters
from rsaparams.keys import complete_private_key
from rsaparams.keys import create_key_pair
from rsaparams.keys import decode
from rsaparams.keys import encode
from rsaparams.keys import import_key_pair
from rsaparams.keys import import_public_key
from rsaparams.params import PrivateFull
from rsaparams.params import PrivatePartial
from rsaparams.params import PublicOnly
from rsaparams.params import RsaParameters
from rsaparams.selector import for_blob_type

__version__ = "0.0.1"
__all__ = [
    "PublicOnly",
    "PrivatePartial",
    "PrivateFull",
    "RsaParameters",
    "encode",
    "decode",
    "complete_private_key",
    "import_key_pair",
    "import_public_key",
    "create_key_pair",
    "for_blob_type",
    "RsaParamsError",
    "MalformedEncoding",
    "UnsupportedEncoding",
    "UnexpectedAlgorithm",
    "UnsupportedBlobType",
    "IncompleteKeyData",
    "InconsistentKeyData",
    "FactorizationFailed",
    "EncodingError",
    "UnsupportedKeyParameters",
]
