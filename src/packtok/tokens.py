"""Token categories and the compact token record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Offsets occupy the high 32 bits of the wire form.
MAX_OFFSET = 2**32 - 1


class CategoryGroup(Enum):
    KEYWORD = "keyword"
    BRACKET = "bracket"
    OPERATOR = "operator"
    SEPARATOR = "separator"
    WHITESPACE = "whitespace"
    QUOTE = "quote"


class Category(Enum):
    """Lexical category of a token.

    Values are wire ordinals. New members may only be appended; reordering
    or removing a member invalidates previously encoded tokens.
    """

    # Keywords
    FUNCTION = 0  # fun
    IF = 1  # if

    # Brackets
    OPEN_PAREN = 2  # (
    CLOSE_PAREN = 3  # )
    OPEN_CURLY = 4  # {
    CLOSE_CURLY = 5  # }
    OPEN_ANGLE = 6  # <  (also an operator, context depending)
    CLOSE_ANGLE = 7  # >

    # Quotes
    DOUBLE_QUOTE = 8  # "
    SINGLE_QUOTE = 9  # '
    BACKTICK = 10  # `

    # Separators
    TYPE_SEPARATOR = 11  # :
    COMMA = 12  # ,

    # Operators
    PLUS = 13  # +
    MINUS = 14  # -
    STAR = 15  # *
    SLASH = 16  # /

    # Whitespace
    SPACE = 17  # " "
    NEWLINE = 18  # \n or \r\n

    # Identifiers, literals and anything else
    UNCLASSIFIED = 19

    @property
    def group(self) -> CategoryGroup | None:
        """Matcher group this category belongs to, None for UNCLASSIFIED."""
        return _GROUPS.get(self)


_GROUPS: dict[Category, CategoryGroup] = {
    Category.FUNCTION: CategoryGroup.KEYWORD,
    Category.IF: CategoryGroup.KEYWORD,
    Category.OPEN_PAREN: CategoryGroup.BRACKET,
    Category.CLOSE_PAREN: CategoryGroup.BRACKET,
    Category.OPEN_CURLY: CategoryGroup.BRACKET,
    Category.CLOSE_CURLY: CategoryGroup.BRACKET,
    Category.OPEN_ANGLE: CategoryGroup.BRACKET,
    Category.CLOSE_ANGLE: CategoryGroup.BRACKET,
    Category.DOUBLE_QUOTE: CategoryGroup.QUOTE,
    Category.SINGLE_QUOTE: CategoryGroup.QUOTE,
    Category.BACKTICK: CategoryGroup.QUOTE,
    Category.TYPE_SEPARATOR: CategoryGroup.SEPARATOR,
    Category.COMMA: CategoryGroup.SEPARATOR,
    Category.PLUS: CategoryGroup.OPERATOR,
    Category.MINUS: CategoryGroup.OPERATOR,
    Category.STAR: CategoryGroup.OPERATOR,
    Category.SLASH: CategoryGroup.OPERATOR,
    Category.SPACE: CategoryGroup.WHITESPACE,
    Category.NEWLINE: CategoryGroup.WHITESPACE,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A classified word: byte offset into the source plus its category.

    The text is not stored; see ``packtok.locate`` to materialize it.
    """

    offset: int
    category: Category
