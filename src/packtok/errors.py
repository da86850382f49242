"""Error types raised by the classifier, codec, and text locator."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from packtok.tokens import CategoryGroup, Token


class PacktokError(Exception):
    """Base class for every packtok failure."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.message = message
        self.offset = offset
        super().__init__(self.format())

    def format(self, filename: str = "<input>") -> str:
        """Render the error as a diagnostic block, as printed by the CLI."""
        location = filename if self.offset is None else f"{filename}@{self.offset}"
        lines = [f"error: {self.message}", f"  --> {location}"]
        lines.extend(f"   = {note}" for note in self._notes())
        return "\n".join(lines)

    def _notes(self) -> list[str]:
        return []


class ClassificationMiss(PacktokError):
    """A single-group probe did not recognize the word."""

    def __init__(self, word: str, group: CategoryGroup, offset: int) -> None:
        self.word = word
        self.group = group
        super().__init__(f"{word!r} is not a {group.value}", offset)


class EncodeError(PacktokError):
    """A token cannot be packed: offset out of 32-bit range or unknown category."""

    def __init__(self, message: str, token: Token) -> None:
        self.token = token
        super().__init__(message, token.offset if isinstance(token.offset, int) else None)


class DecodeError(PacktokError):
    """Packed bytes do not describe a token."""

    def __init__(self, message: str, data: bytes, offset: int | None = None) -> None:
        self.data = bytes(data)
        super().__init__(message, offset)

    def _notes(self) -> list[str]:
        return [f"bytes: {self.data.hex(' ')}"]


class LocatorError(PacktokError):
    """A token sequence violates the ordering contract the locator relies on."""


class TokenNotFoundError(LocatorError):
    """The token is not a member of the sequence it was looked up in."""

    def __init__(self, token: Token) -> None:
        self.token = token
        super().__init__(
            f"token {token.category.name} at offset {token.offset} is not in the sequence",
            token.offset,
        )


class SpanError(LocatorError):
    """A token span is negative or extends past the end of the source."""

    def __init__(self, message: str, token: Token, end: int | None = None) -> None:
        self.token = token
        self.end = end
        super().__init__(message, token.offset)


class SequenceOrderError(LocatorError):
    """Offsets in a sequence are not strictly increasing."""

    def __init__(self, previous: int, offset: int) -> None:
        self.previous = previous
        super().__init__(
            f"offset {offset} does not follow offset {previous}; "
            "sequence offsets must be strictly increasing",
            offset,
        )


class SourceDecodeError(PacktokError):
    """Bytes at a token's span are not valid text in the expected encoding."""

    def __init__(self, data: bytes, offset: int, encoding: str, reason: str) -> None:
        self.data = bytes(data)
        self.encoding = encoding
        super().__init__(f"source bytes are not valid {encoding}: {reason}", offset)

    def _notes(self) -> list[str]:
        preview = self.data[:16].hex(" ")
        if len(self.data) > 16:
            preview += " ..."
        return [f"bytes: {preview}", "the source does not match the one the offsets came from"]
