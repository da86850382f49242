"""Compact lexer tokens with on-demand source text recovery."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from packtok.tokens import Token

__version__ = "0.1.0"


def tokenize(data: bytes, encoding: str = "utf-8") -> list[Token]:
    """Scan and classify source bytes into an offset-sorted token sequence."""
    from packtok.classify import classify_words
    from packtok.scanner import scan

    return classify_words(scan(data, encoding))
