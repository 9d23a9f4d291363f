"""Completeness classification for streamed blocks.

While a response streams, the last block may hold a code fence whose
closing marker has not arrived. Renderers use this signal to show a
"still typing" state for that block instead of flashing a finished one.

Only the last block can be incomplete, and only while streaming: every
earlier block was already followed by another block boundary.

Thread Safety:
All functions are pure. Safe to call from any thread.
"""

from __future__ import annotations

from collections.abc import Sequence

from remiendo.charsets import FENCE_CHARS, FENCE_MIN_RUN


def has_incomplete_code_fence(markdown: str) -> bool:
    """Check for an odd number of backtick or tilde fence markers.

    A marker is a run of three or more of the same fence character. Backtick
    and tilde markers are counted independently; either count being odd
    means a fence is still open.

    Example:
        >>> has_incomplete_code_fence("```js\\nconst x = 1;")
        True
        >>> has_incomplete_code_fence("```js\\nconst x = 1;\\n```")
        False
    """
    if not isinstance(markdown, str):
        return False

    counts = dict.fromkeys(FENCE_CHARS, 0)
    i = 0
    length = len(markdown)
    while i < length:
        char = markdown[i]
        if char not in FENCE_CHARS:
            i += 1
            continue
        end = i + 1
        while end < length and markdown[end] == char:
            end += 1
        if end - i >= FENCE_MIN_RUN:
            counts[char] += 1
        i = end
    return any(count % 2 for count in counts.values())


def is_block_incomplete(blocks: Sequence[str], index: int, *, streaming: bool) -> bool:
    """True only for the last block, while streaming, with an open fence."""
    if not streaming or not blocks or index != len(blocks) - 1:
        return False
    return has_incomplete_code_fence(blocks[index])


def incomplete_flags(blocks: Sequence[str], *, streaming: bool) -> list[bool]:
    """``is_block_incomplete`` for every block, in order."""
    flags = [False] * len(blocks)
    if flags:
        flags[-1] = is_block_incomplete(blocks, len(blocks) - 1, streaming=streaming)
    return flags


__all__ = [
    "has_incomplete_code_fence",
    "incomplete_flags",
    "is_block_incomplete",
]
