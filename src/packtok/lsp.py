"""Minimal LSP server for packtok: semantic tokens and token hover."""

from __future__ import annotations

import io
from dataclasses import dataclass

from lsprotocol.types import (
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SemanticTokens,
    SemanticTokensLegend,
    SemanticTokensParams,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from packtok.classify import classify_words
from packtok.codec import encode
from packtok.locate import iter_texts
from packtok.scanner import scan
from packtok.tokens import Category, CategoryGroup, Token

LEGEND = SemanticTokensLegend(
    token_types=["keyword", "operator", "string", "variable"],
    token_modifiers=[],
)

_TYPE_INDEX = {name: i for i, name in enumerate(LEGEND.token_types)}

_GROUP_TYPES = {
    CategoryGroup.KEYWORD: "keyword",
    CategoryGroup.BRACKET: "operator",
    CategoryGroup.OPERATOR: "operator",
    CategoryGroup.SEPARATOR: "operator",
    CategoryGroup.QUOTE: "string",
}

server = LanguageServer("packtok-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


@dataclass(frozen=True, slots=True)
class TokenSpan:
    """A token placed on an editor line, with its length in UTF-16 units."""

    token: Token
    text: str
    line: int
    character: int
    length: int


def _utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def token_spans(source: str) -> list[TokenSpan]:
    """Tokenize document text and place each token at its line and character."""
    data = source.encode("utf-8")
    tokens = classify_words(scan(data))
    spans: list[TokenSpan] = []
    line = 0
    character = 0
    for token, text in iter_texts(tokens, io.BytesIO(data)):
        if token.category is Category.NEWLINE:
            spans.append(TokenSpan(token, text, line, character, _utf16_len(text)))
            line += 1
            character = 0
            continue
        # A lone \r inside a word is a line break to LSP clients; the span
        # covers only the part on the token's first line.
        parts = text.split("\r")
        spans.append(TokenSpan(token, text, line, character, _utf16_len(parts[0])))
        if len(parts) > 1:
            line += len(parts) - 1
            character = _utf16_len(parts[-1])
        else:
            character += _utf16_len(text)
    return spans


def semantic_data(source: str) -> list[int]:
    """Encode non-whitespace tokens as LSP relative semantic token data."""
    data: list[int] = []
    prev_line = 0
    prev_char = 0
    for span in token_spans(source):
        group = span.token.category.group
        if group is CategoryGroup.WHITESPACE:
            continue
        token_type = _GROUP_TYPES.get(group, "variable")
        delta_line = span.line - prev_line
        delta_char = span.character - prev_char if delta_line == 0 else span.character
        data.extend([delta_line, delta_char, span.length, _TYPE_INDEX[token_type], 0])
        prev_line = span.line
        prev_char = span.character
    return data


def _hover_text(span: TokenSpan) -> str:
    token = span.token
    group = token.category.group
    lines = [
        f"**{token.category.name}** ({group.value if group is not None else 'unclassified'})",
        "",
        f"offset `{token.offset}`, ordinal `{token.category.value}`, "
        f"packed `{encode(token).hex(' ')}`",
    ]
    return "\n".join(lines)


@server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
def semantic_tokens_full(ls: LanguageServer, params: SemanticTokensParams) -> SemanticTokens:
    doc = ls.workspace.get_text_document(params.text_document.uri)
    return SemanticTokens(data=semantic_data(doc.source))


@server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: LanguageServer, params: HoverParams) -> Hover | None:
    doc = ls.workspace.get_text_document(params.text_document.uri)
    pos = params.position
    for span in token_spans(doc.source):
        if span.line != pos.line or span.token.category is Category.NEWLINE:
            continue
        if span.character <= pos.character < span.character + span.length:
            return Hover(
                contents=MarkupContent(kind=MarkupKind.Markdown, value=_hover_text(span)),
                range=Range(
                    start=Position(line=span.line, character=span.character),
                    end=Position(line=span.line, character=span.character + span.length),
                ),
            )
    return None


def main() -> None:
    server.start_io()
