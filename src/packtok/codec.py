"""Fixed-width wire form for tokens.

Each token packs into 5 big-endian bytes: the byte offset in the high
32 bits and the category ordinal in the low 8 bits. Because the offset
occupies the high-order bytes, comparing wire forms byte by byte orders
them the same way as their offsets.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from packtok.errors import DecodeError, EncodeError
from packtok.tokens import MAX_OFFSET, Category, Token

TOKEN_SIZE = 5

_CATEGORY_BITS = 8
_CATEGORY_MASK = (1 << _CATEGORY_BITS) - 1

_BY_ORDINAL = {c.value: c for c in Category}


def encode(token: Token) -> bytes:
    """Pack a token into its 5-byte wire form."""
    offset = token.offset
    if not isinstance(token.category, Category):
        raise EncodeError(f"not a token category: {token.category!r}", token)
    if not isinstance(offset, int) or isinstance(offset, bool):
        raise EncodeError(f"offset must be an integer, got {type(offset).__name__}", token)
    if not 0 <= offset <= MAX_OFFSET:
        raise EncodeError(f"offset {offset} does not fit in 32 bits", token)
    word = (offset << _CATEGORY_BITS) | (token.category.value & _CATEGORY_MASK)
    return word.to_bytes(TOKEN_SIZE, "big")


def decode(data: bytes) -> Token:
    """Unpack a 5-byte wire form into a token.

    Raises DecodeError if the buffer is not exactly 5 bytes or the low byte
    is not an assigned category ordinal.
    """
    if len(data) != TOKEN_SIZE:
        raise DecodeError(f"packed token must be {TOKEN_SIZE} bytes, got {len(data)}", data)
    word = int.from_bytes(data, "big")
    offset = word >> _CATEGORY_BITS
    ordinal = word & _CATEGORY_MASK
    category = _BY_ORDINAL.get(ordinal)
    if category is None:
        raise DecodeError(f"unknown category ordinal {ordinal}", data, offset)
    return Token(offset, category)


def iter_packed(data: bytes) -> Iterator[bytes]:
    """Split a buffer of concatenated wire forms into 5-byte records."""
    if len(data) % TOKEN_SIZE:
        raise DecodeError(
            f"token buffer length {len(data)} is not a multiple of {TOKEN_SIZE}",
            data[-(len(data) % TOKEN_SIZE) :],
        )
    view = memoryview(data)
    for start in range(0, len(data), TOKEN_SIZE):
        yield bytes(view[start : start + TOKEN_SIZE])


def encode_sequence(tokens: Iterable[Token]) -> bytes:
    """Concatenate the wire forms of a token sequence."""
    return b"".join(encode(t) for t in tokens)


def decode_sequence(data: bytes) -> list[Token]:
    """Decode a buffer of concatenated wire forms."""
    return [decode(record) for record in iter_packed(data)]
