"""Minimal strict DER reader and writer for the constructs RSA key blobs are made of.

Primitive values (INTEGER, OCTET STRING, BIT STRING, OBJECT IDENTIFIER, NULL) go through the pyasn1 DER codec. The
tag-length framing around them is handled here, because key blobs must be rejected on any deviation from definite
length DER: wrong tags, truncated buffers, trailing garbage or BER-only length forms.

Typical usage example:

    blob = write_sequence([write_integer(b"\x0c\xa1"), write_integer(b"\x11")])
    n, e = (read_integer(node) for node in read_sequence(blob))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from typing import Iterable, NamedTuple

from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.type import univ

from rsaparams import bigint
from rsaparams.errors import EncodingError
from rsaparams.errors import MalformedEncoding
from rsaparams.errors import UnsupportedEncoding

INTEGER = 0x02
BIT_STRING = 0x03
OCTET_STRING = 0x04
NULL = 0x05
OBJECT_IDENTIFIER = 0x06
SEQUENCE = 0x30

TAG_NAMES = {
    INTEGER: "INTEGER",
    BIT_STRING: "BIT STRING",
    OCTET_STRING: "OCTET STRING",
    NULL: "NULL",
    OBJECT_IDENTIFIER: "OBJECT IDENTIFIER",
    SEQUENCE: "SEQUENCE",
}


class Node(NamedTuple):
    """A single decoded tag-length-value element.

    Attributes:
        tag: The identifier octet.
        content: The value octets.
        encoded: The complete element, header included.
    """
    tag: int
    content: bytes
    encoded: bytes


def encode_length(length: int) -> bytes:
    """Encodes a DER length field, short form up to 127 and long form above."""
    if length < 0x80:
        return bytes((length,))
    body = bigint.from_int(length)
    if len(body) > 0x7e:
        raise EncodingError("DER length field too long.")
    return bytes((0x80 | len(body),)) + body


def write_tlv(tag: int, content: bytes) -> bytes:
    return bytes((tag,)) + encode_length(len(content)) + content


def write_sequence(children: Iterable[bytes]) -> bytes:
    """Wraps already encoded elements into a SEQUENCE, keeping their order."""
    return write_tlv(SEQUENCE, b"".join(children))


def write_integer(data: bytes) -> bytes:
    """Writes an unsigned big-endian magnitude as an INTEGER.

    A zero sign byte is prepended when the high bit of the magnitude is set.
    """
    return encoder.encode(univ.Integer(bigint.to_int(data)))


def write_octet_string(data: bytes) -> bytes:
    return encoder.encode(univ.OctetString(data))


def write_bit_string(data: bytes) -> bytes:
    """Writes an octet-aligned BIT STRING (zero unused bits)."""
    return encoder.encode(univ.BitString.fromOctetString(data))


def write_object_identifier(dotted: str) -> bytes:
    try:
        return encoder.encode(univ.ObjectIdentifier(dotted))
    except (error.PyAsn1Error, ValueError) as exc:
        raise EncodingError(f"Invalid object identifier {dotted!r}.") from exc


def write_null() -> bytes:
    return encoder.encode(univ.Null(""))


def _read_header(data: bytes, offset: int) -> tuple[int, int, int]:
    """Parses the identifier and length octets starting at `offset`.

    Returns:
        Tuple of (tag, content length, content offset).

    Raises:
        MalformedEncoding: On truncated or non-minimal headers.
        UnsupportedEncoding: On indefinite lengths or high tag numbers.
    """
    if len(data) < offset + 2:
        raise MalformedEncoding("Truncated DER header.")
    tag = data[offset]
    if tag & 0x1f == 0x1f:
        raise UnsupportedEncoding("High tag number form is not supported.")
    first = data[offset + 1]
    offset += 2
    if first < 0x80:
        return tag, first, offset
    if first == 0x80:
        raise UnsupportedEncoding("Indefinite length encoding is not supported.")
    count = first & 0x7f
    if count == 0x7f:
        raise MalformedEncoding("Reserved DER length octet.")
    if len(data) < offset + count:
        raise MalformedEncoding("Truncated DER length.")
    length = bigint.to_int(data[offset:offset + count])
    if data[offset] == 0 or length < 0x80:
        raise MalformedEncoding("Non-minimal DER length.")
    return tag, length, offset + count


def read_node(data: bytes, offset: int = 0) -> tuple[Node, int]:
    """Reads one element starting at `offset`.

    Returns:
        The element and the offset just past it.
    """
    tag, length, start = _read_header(data, offset)
    end = start + length
    if end > len(data):
        raise MalformedEncoding(f"DER value truncated: {length} bytes declared, {len(data) - start} available.")
    return Node(tag, bytes(data[start:end]), bytes(data[offset:end])), end


def read_nodes(data: bytes) -> list[Node]:
    """Reads consecutive elements until `data` is exhausted."""
    nodes = []
    offset = 0
    while offset < len(data):
        node, offset = read_node(data, offset)
        nodes.append(node)
    return nodes


def read_single(data: bytes, tag: int) -> Node:
    """Reads exactly one element of the given tag spanning all of `data`."""
    node, end = read_node(data)
    expect_tag(node, tag)
    if end != len(data):
        raise MalformedEncoding(f"{len(data) - end} trailing bytes after DER {TAG_NAMES.get(tag, hex(tag))}.")
    return node


def expect_tag(node: Node, tag: int) -> None:
    if node.tag != tag:
        raise MalformedEncoding(f"Expected DER {TAG_NAMES.get(tag, hex(tag))}, got tag {node.tag:#04x}.")


def read_sequence(data: bytes) -> list[Node]:
    """Reads a SEQUENCE spanning all of `data` and returns its children in order."""
    return read_nodes(read_single(data, SEQUENCE).content)


def _decode_primitive(node: Node, asn1_spec):
    try:
        value, rest = decoder.decode(node.encoded, asn1Spec=asn1_spec)
    except error.PyAsn1Error as exc:
        raise MalformedEncoding(f"Invalid DER {TAG_NAMES[node.tag]}.") from exc
    if rest:
        raise MalformedEncoding(f"Trailing bytes in DER {TAG_NAMES[node.tag]}.")
    return value


def read_integer(node: Node) -> bytes:
    """Reads a non-negative INTEGER as a normalized unsigned magnitude.

    Raises:
        MalformedEncoding: On a wrong tag, empty or non-minimal content, or a negative value.
    """
    expect_tag(node, INTEGER)
    content = node.content
    if not content:
        raise MalformedEncoding("Empty DER INTEGER.")
    if len(content) > 1 and content[0] == 0 and not content[1] & 0x80:
        raise MalformedEncoding("Non-minimal DER INTEGER.")
    if content[0] & 0x80:
        raise MalformedEncoding("Negative DER INTEGER where an unsigned value is expected.")
    return bigint.from_int(int(_decode_primitive(node, univ.Integer())))


def read_octet_string(node: Node) -> bytes:
    expect_tag(node, OCTET_STRING)
    return _decode_primitive(node, univ.OctetString()).asOctets()


def read_bit_string(node: Node) -> bytes:
    """Reads an octet-aligned BIT STRING."""
    expect_tag(node, BIT_STRING)
    if not node.content or node.content[0] != 0:
        raise MalformedEncoding("DER BIT STRING is not octet aligned.")
    return _decode_primitive(node, univ.BitString()).asOctets()


def read_object_identifier(node: Node) -> str:
    """Reads an OBJECT IDENTIFIER in dotted form."""
    expect_tag(node, OBJECT_IDENTIFIER)
    return str(_decode_primitive(node, univ.ObjectIdentifier()))


def read_null(node: Node) -> None:
    expect_tag(node, NULL)
    if node.content:
        raise MalformedEncoding("DER NULL with content.")
