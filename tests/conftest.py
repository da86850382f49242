"""Shared test fixtures and helpers."""

from __future__ import annotations

import io

import pytest

from packtok import tokenize
from packtok.tokens import Category, Token


@pytest.fixture
def lex():
    """Return a helper that tokenizes text and returns (tokens, backing source)."""

    def _lex(text: str | bytes) -> tuple[list[Token], io.BytesIO]:
        data = text.encode("utf-8") if isinstance(text, str) else text
        return tokenize(data), io.BytesIO(data)

    return _lex


@pytest.fixture
def source_file(tmp_path):
    """Return a helper that writes bytes to a file and returns its path."""

    def _write(data: str | bytes, name: str = "input.src"):
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8", newline="")
        else:
            path.write_bytes(data)
        return path

    return _write


def assert_categories(tokens: list[Token], expected: list[Category]) -> None:
    """Assert that the token categories match the expected list."""
    actual = [t.category for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_offsets(tokens: list[Token], expected: list[int]) -> None:
    """Assert that the token offsets match the expected list."""
    actual = [t.offset for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
