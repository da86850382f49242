"""Word classifier: maps an isolated literal word to its token category.

Classification tries each group's table in a fixed priority order and the
first table containing the word wins. No literal currently appears in two
tables; any future overlap resolves by the order of ``CASCADE``.

Comment-introducing characters get no special handling: ``/`` and ``*``
classify as operators and anything else falls through to UNCLASSIFIED.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from packtok.codec import encode
from packtok.errors import ClassificationMiss, SequenceOrderError
from packtok.tokens import Category, CategoryGroup, Token

KEYWORDS: Mapping[str, Category] = {
    "fun": Category.FUNCTION,
    "if": Category.IF,
}

BRACKETS: Mapping[str, Category] = {
    "(": Category.OPEN_PAREN,
    ")": Category.CLOSE_PAREN,
    "<": Category.OPEN_ANGLE,
    ">": Category.CLOSE_ANGLE,
    "{": Category.OPEN_CURLY,
    "}": Category.CLOSE_CURLY,
}

OPERATORS: Mapping[str, Category] = {
    "+": Category.PLUS,
    "-": Category.MINUS,
    "*": Category.STAR,
    "/": Category.SLASH,
}

SEPARATORS: Mapping[str, Category] = {
    ":": Category.TYPE_SEPARATOR,
    ",": Category.COMMA,
}

WHITESPACE: Mapping[str, Category] = {
    " ": Category.SPACE,
    "\n": Category.NEWLINE,
    "\r\n": Category.NEWLINE,
}

QUOTES: Mapping[str, Category] = {
    '"': Category.DOUBLE_QUOTE,
    "'": Category.SINGLE_QUOTE,
    "`": Category.BACKTICK,
}

# Priority order of the classification cascade.
CASCADE: tuple[tuple[CategoryGroup, Mapping[str, Category]], ...] = (
    (CategoryGroup.KEYWORD, KEYWORDS),
    (CategoryGroup.BRACKET, BRACKETS),
    (CategoryGroup.OPERATOR, OPERATORS),
    (CategoryGroup.SEPARATOR, SEPARATORS),
    (CategoryGroup.WHITESPACE, WHITESPACE),
    (CategoryGroup.QUOTE, QUOTES),
)

_TABLES: dict[CategoryGroup, Mapping[str, Category]] = dict(CASCADE)


def probe(group: CategoryGroup, offset: int, word: str) -> Token:
    """Classify *word* against a single group.

    Raises ClassificationMiss if the word is not one of the group's literals.
    """
    category = _TABLES[group].get(word)
    if category is None:
        raise ClassificationMiss(word, group, offset)
    return Token(offset, category)


def probe_packed(group: CategoryGroup, offset: int, word: str) -> bytes:
    """Probe a single group and return the token's wire form."""
    return encode(probe(group, offset, word))


def classify(offset: int, word: str) -> Token:
    """Classify *word* at *offset*. Never fails; unknown words are UNCLASSIFIED."""
    for group, _table in CASCADE:
        try:
            return probe(group, offset, word)
        except ClassificationMiss:
            continue
    return Token(offset, Category.UNCLASSIFIED)


def classify_packed(offset: int, word: str) -> bytes:
    """Classify *word* and return the token's wire form."""
    return encode(classify(offset, word))


def classify_words(words: Iterable[tuple[int, str]]) -> list[Token]:
    """Classify a scanner's (offset, word) stream into a token sequence.

    Offsets must be strictly increasing, as the locator requires.
    """
    tokens: list[Token] = []
    for offset, word in words:
        if tokens and offset <= tokens[-1].offset:
            raise SequenceOrderError(tokens[-1].offset, offset)
        tokens.append(classify(offset, word))
    return tokens
