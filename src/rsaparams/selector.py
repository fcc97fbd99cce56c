"""Dispatch from blob type tags to formatters."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsaparams import pkcs
from rsaparams import winblob
from rsaparams.errors import UnsupportedBlobType
from rsaparams.formatter import KeyFormatter

FORMATTERS: dict[str, KeyFormatter] = {
    formatter.name: formatter for formatter in (
        pkcs.PKCS1_PRIVATE,
        pkcs.PKCS1_PUBLIC,
        pkcs.PKCS8,
        pkcs.X509_SPKI,
        winblob.CAPI_PRIVATE,
        winblob.CAPI_PUBLIC,
        winblob.BCRYPT_PRIVATE,
        winblob.BCRYPT_PUBLIC,
    )
}

PRIVATE_BLOB_TYPES = tuple(name for name, formatter in FORMATTERS.items() if formatter.private)
PUBLIC_BLOB_TYPES = tuple(name for name, formatter in FORMATTERS.items() if not formatter.private)


def for_blob_type(tag: str) -> KeyFormatter:
    """Looks up the formatter for a blob type tag.

    Args:
        tag: One of the keys of `FORMATTERS`, e.g. "PKCS8" or "X509_SPKI". Case-insensitive.

    Returns:
        The shared formatter instance.

    Raises:
        UnsupportedBlobType: If no formatter handles `tag`.
    """
    try:
        return FORMATTERS[tag.upper()]
    except (KeyError, AttributeError) as exc:
        raise UnsupportedBlobType(f"Unsupported blob type {tag!r}.") from exc
