"""Reference scanner: splits raw source bytes into (offset, word) pairs.

Every single-character atom the classifier knows and every space or line
break becomes a word of its own; runs of any other bytes form one word.
The pairs cover the input without gaps and offsets are byte offsets, which
is the contract the classifier and locator expect from any scanner.
"""

from __future__ import annotations

from collections.abc import Iterator

from packtok.classify import CASCADE
from packtok.errors import SourceDecodeError

# Single-byte words; multi-character literals (keywords) come out of runs.
_BREAKS = frozenset(
    word.encode("ascii") for _group, table in CASCADE for word in table if len(word) == 1
)


def scan(data: bytes, encoding: str = "utf-8") -> Iterator[tuple[int, str]]:
    """Yield (byte offset, word) for every word in *data*."""
    pos = 0
    run_start = 0
    size = len(data)

    while pos < size:
        ch = data[pos : pos + 1]
        if ch == b"\r" and data[pos + 1 : pos + 2] == b"\n":
            width = 2
        elif ch in _BREAKS:
            width = 1
        else:
            pos += 1
            continue

        if run_start < pos:
            yield run_start, _decode(data[run_start:pos], run_start, encoding)
        yield pos, data[pos : pos + width].decode("ascii")
        pos += width
        run_start = pos

    if run_start < size:
        yield run_start, _decode(data[run_start:], run_start, encoding)


def _decode(chunk: bytes, offset: int, encoding: str) -> str:
    try:
        return chunk.decode(encoding)
    except UnicodeDecodeError as exc:
        raise SourceDecodeError(chunk, offset, encoding, exc.reason) from exc
