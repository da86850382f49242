"""Test error attributes and formatted diagnostics."""

import io

import pytest

from packtok.classify import probe
from packtok.codec import decode, encode
from packtok.errors import (
    ClassificationMiss,
    DecodeError,
    EncodeError,
    LocatorError,
    PacktokError,
    SequenceOrderError,
    SourceDecodeError,
    SpanError,
    TokenNotFoundError,
)
from packtok.locate import token_text
from packtok.tokens import Category, CategoryGroup, Token


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [
            ClassificationMiss,
            EncodeError,
            DecodeError,
            LocatorError,
            SourceDecodeError,
        ],
    )
    def test_base_class(self, cls):
        assert issubclass(cls, PacktokError)

    @pytest.mark.parametrize("cls", [TokenNotFoundError, SpanError, SequenceOrderError])
    def test_locator_errors(self, cls):
        assert issubclass(cls, LocatorError)


class TestErrorFormatting:
    def test_format_starts_with_error(self):
        with pytest.raises(ClassificationMiss) as exc_info:
            probe(CategoryGroup.BRACKET, 4, "x")
        assert exc_info.value.format().startswith("error:")

    def test_format_contains_offset(self):
        with pytest.raises(ClassificationMiss) as exc_info:
            probe(CategoryGroup.BRACKET, 4, "x")
        assert "<input>@4" in exc_info.value.format()

    def test_format_with_custom_filename(self):
        with pytest.raises(TokenNotFoundError) as exc_info:
            token_text(Token(3, Category.IF), [], io.BytesIO(b""))
        assert "main.src@3" in exc_info.value.format("main.src")

    def test_format_without_offset(self):
        err = DecodeError("bad", b"\x01")
        assert "--> <input>\n" in err.format()

    def test_str_is_formatted(self):
        err = DecodeError("bad", b"\x01")
        assert str(err) == err.format()

    def test_decode_error_shows_bytes(self):
        with pytest.raises(DecodeError) as exc_info:
            decode(b"\x00\x00\x00\x00\xff")
        assert "bytes: 00 00 00 00 ff" in exc_info.value.format()

    def test_source_decode_error_preview_truncated(self):
        err = SourceDecodeError(b"\xff" * 20, 0, "utf-8", "invalid start byte")
        formatted = err.format()
        assert "..." in formatted
        assert "does not match" in formatted

    def test_encode_error_keeps_token(self):
        token = Token(2**40, Category.PLUS)
        with pytest.raises(EncodeError) as exc_info:
            encode(token)
        assert exc_info.value.token is token

    def test_sequence_order_message(self):
        err = SequenceOrderError(8, 3)
        assert err.previous == 8
        assert err.offset == 3
        assert "strictly increasing" in err.message
