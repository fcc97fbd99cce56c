"""The common interface of key blob formatters."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import typing

from rsaparams.errors import IncompleteKeyData
from rsaparams.params import PrivateFull
from rsaparams.params import PrivatePartial
from rsaparams.params import PublicOnly
from rsaparams.params import RsaParameters


class KeyFormatter:
    """Translates between `RsaParameters` and one blob format.

    Formatters hold no state and may be shared freely between threads.

    Attributes:
        name: The blob type tag the formatter is registered under.
        private: Whether the format carries private key material.
    """
    name: str = ""
    private: bool = False

    def encode(self, params: RsaParameters) -> bytes:
        """Serializes the parameters into a blob of this format."""
        raise NotImplementedError

    def decode(self, blob: bytes) -> RsaParameters:
        """Parses a blob of this format."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


def require_full(params: RsaParameters, blob_name: str) -> PrivateFull:
    """Narrows the parameters to a full private key.

    Formatters never complete keys on their own; completion is left to the caller.

    Raises:
        IncompleteKeyData: For public keys and private keys without CRT components.
    """
    match params:
        case PrivateFull():
            return params
        case PrivatePartial():
            raise IncompleteKeyData(f"{blob_name} needs the CRT components; complete the private key first.")
        case PublicOnly():
            raise IncompleteKeyData(f"{blob_name} needs a private key.")
        case _:
            typing.assert_never(params)
