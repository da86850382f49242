"""Materialize the source text a token covers.

Tokens store only their start offset. A token's text runs from its offset
up to the offset of the next token in its sequence, or to the end of the
source for the last token, so the whole sequence and the exact bytes that
were scanned are needed to recover it.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import BinaryIO

from packtok.codec import decode, encode
from packtok.errors import SourceDecodeError, SpanError, TokenNotFoundError
from packtok.tokens import Token


@contextmanager
def reading_at(source: BinaryIO, offset: int) -> Iterator[BinaryIO]:
    """Seek *source* to *offset* for the duration of the block.

    The previous position is restored on exit, so seek-then-read happens as
    one scoped use of the handle.
    """
    saved = source.tell()
    source.seek(offset)
    try:
        yield source
    finally:
        source.seek(saved)


def token_text(
    token: Token,
    tokens: Sequence[Token],
    source: BinaryIO,
    encoding: str = "utf-8",
) -> str:
    """Return the text of *token*, a member of the offset-sorted *tokens*."""
    idx = bisect_left(tokens, token.offset, key=lambda t: t.offset)
    if idx == len(tokens) or tokens[idx] != token:
        raise TokenNotFoundError(token)
    end = tokens[idx + 1].offset if idx + 1 < len(tokens) else None
    return _read_span(source, token, end, encoding)


def token_text_packed(
    token: Token,
    packed: Sequence[bytes],
    source: BinaryIO,
    encoding: str = "utf-8",
) -> str:
    """Return the text of *token*, looked up in a sequence of wire forms."""
    needle = encode(token)
    idx = bisect_left(packed, needle)
    if idx == len(packed) or packed[idx] != needle:
        raise TokenNotFoundError(token)
    end = decode(packed[idx + 1]).offset if idx + 1 < len(packed) else None
    return _read_span(source, token, end, encoding)


def iter_texts(
    tokens: Sequence[Token],
    source: BinaryIO,
    encoding: str = "utf-8",
) -> Iterator[tuple[Token, str]]:
    """Yield (token, text) for every token of a sequence, in order."""
    for idx, token in enumerate(tokens):
        end = tokens[idx + 1].offset if idx + 1 < len(tokens) else None
        yield token, _read_span(source, token, end, encoding)


def _read_span(source: BinaryIO, token: Token, end: int | None, encoding: str) -> str:
    with reading_at(source, token.offset) as f:
        if end is None:
            data = f.read()
            if not data:
                raise SpanError(
                    f"source ended before last token at offset {token.offset}",
                    token,
                )
        else:
            length = end - token.offset
            if length < 0:
                raise SpanError(
                    f"token at offset {token.offset} ends before it starts (next offset {end})",
                    token,
                    end,
                )
            data = f.read(length)
            if len(data) != length:
                raise SpanError(
                    f"source ended after {len(data)} of {length} bytes "
                    f"for token at offset {token.offset}",
                    token,
                    end,
                )
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise SourceDecodeError(data, token.offset, encoding, exc.reason) from exc
