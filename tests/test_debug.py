"""Test the --debug token dump."""

import io

from packtok.debug import dump_tokens
from packtok.tokens import Category, Token


class TestDumpTokens:
    def test_header(self):
        out = io.StringIO()
        dump_tokens([], file=out)
        assert out.getvalue() == "Tokens (0)\n"

    def test_row_without_source(self):
        out = io.StringIO()
        dump_tokens([Token(258, Category.COMMA)], file=out)
        row = out.getvalue().splitlines()[1]
        assert row.split() == ["258", "12", "COMMA", "00", "00", "01", "02", "0c"]

    def test_rows_with_text(self):
        out = io.StringIO()
        tokens = [Token(0, Category.FUNCTION), Token(3, Category.OPEN_PAREN)]
        dump_tokens(tokens, io.BytesIO(b"fun("), file=out)
        lines = out.getvalue().splitlines()
        assert lines[0] == "Tokens (2)"
        assert lines[1].endswith("'fun'")
        assert lines[2].endswith("'('")

    def test_default_stream_is_current_stderr(self, monkeypatch):
        stream = io.StringIO()
        monkeypatch.setattr("sys.stderr", stream)
        dump_tokens([Token(0, Category.IF)])
        assert stream.getvalue().startswith("Tokens (1)\n")
