"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import BinaryIO, TextIO

from packtok.codec import encode
from packtok.locate import iter_texts
from packtok.tokens import Token


def dump_tokens(
    tokens: Sequence[Token],
    source: BinaryIO | None = None,
    *,
    encoding: str = "utf-8",
    file: TextIO | None = None,
) -> None:
    """Print one line per token: offset, ordinal, category, wire bytes, and text.

    Writes to the current sys.stderr unless *file* is given.
    """
    if file is None:
        file = sys.stderr
    file.write(f"Tokens ({len(tokens)})\n")
    if source is None:
        for token in tokens:
            file.write(_row(token) + "\n")
        return
    for token, text in iter_texts(tokens, source, encoding):
        file.write(f"{_row(token)}  {text!r}\n")


def _row(token: Token) -> str:
    return (
        f"  {token.offset:>10}  {token.category.value:>3}  "
        f"{token.category.name:<14}  {encode(token).hex(' ')}"
    )
