"""Lexical scanners for streaming Markdown.

Stateless position predicates used by every handler to avoid acting in the
wrong lexical context (code fences, inline code, math, link URLs).

Each scanner is a position-tracked loop rather than a regular expression, so
runs of thousands of marker characters cannot trigger backtracking.

Two families live here:

1. Predicates that answer a single question for ``(text, position)``:
   ``inside_code_block``, ``inside_math_block``, ``inside_link_or_image_url``,
   ``is_word_char``, ``is_horizontal_rule`` and the bracket matchers.
2. Region finders that return sorted ``(start, end)`` spans for a whole
   block: ``fence_ranges``, ``inline_code_ranges``, ``code_ranges``,
   ``math_ranges`` and ``link_url_ranges``, plus ``thematic_break_lines``.
   Handlers compute these once per pass and test positions with
   ``in_ranges`` so each pass stays O(n).

Thread Safety:
    All functions are pure. Safe to call from any thread.

"""

from __future__ import annotations

import unicodedata
from bisect import bisect_right
from collections.abc import Sequence

from remiendo.charsets import ASCII_WORD, FENCE_CHARS, FENCE_MIN_RUN, INLINE_WHITESPACE

Range = tuple[int, int]


def is_word_char(char: str) -> bool:
    """Check if a character is a word character.

    ASCII letters, digits and underscore take the fast path; other characters
    qualify when their Unicode category is a letter (L*) or number (N*).
    Empty input is not a word character.

    Example:
        >>> is_word_char("a"), is_word_char("é"), is_word_char("*"), is_word_char("")
        (True, True, False, False)
    """
    if not char:
        return False
    char = char[0]
    if char in ASCII_WORD:
        return True
    if char.isascii():
        return False
    category = unicodedata.category(char)
    return category[0] in ("L", "N")


def find_matching_opening_bracket(text: str, close_index: int) -> int:
    """Find the ``[`` that matches the ``]`` at ``close_index``.

    Searches backwards counting nesting depth. Returns -1 when unmatched.
    """
    depth = 1
    for i in range(close_index - 1, -1, -1):
        char = text[i]
        if char == "]":
            depth += 1
        elif char == "[":
            depth -= 1
            if depth == 0:
                return i
    return -1


def find_matching_closing_bracket(text: str, open_index: int) -> int:
    """Find the ``]`` that matches the ``[`` at ``open_index``.

    Searches forwards counting nesting depth. Returns -1 when unmatched.
    """
    depth = 1
    for i in range(open_index + 1, len(text)):
        char = text[i]
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return i
    return -1


def _run_end(text: str, start: int) -> int:
    """Index just past the run of ``text[start]`` beginning at ``start``."""
    char = text[start]
    end = start + 1
    length = len(text)
    while end < length and text[end] == char:
        end += 1
    return end


def inside_code_block(text: str, position: int) -> bool:
    """Check if ``position`` falls inside a fenced code region.

    A fence marker is a run of three or more backticks or tildes. Markers
    toggle in order from the start of the text; a fence is only closed by a
    run of the same character at least as long as its opener. The fence
    markers themselves count as inside. A fence that never closes makes
    every later position inside.

    Example:
        >>> inside_code_block("```\\ncode\\n```", 5)
        True
        >>> inside_code_block("before ```code``` after", 2)
        False
    """
    if not isinstance(text, str) or position < 0:
        return False

    open_char: str | None = None
    open_len = 0
    i = 0
    length = len(text)
    while i < length:
        if open_char is None and i > position:
            return False
        char = text[i]
        if char not in FENCE_CHARS:
            i += 1
            continue
        end = _run_end(text, i)
        if end - i >= FENCE_MIN_RUN:
            if open_char is None:
                if i <= position < end:
                    return True
                open_char = char
                open_len = end - i
            elif char == open_char and end - i >= open_len:
                if position < end:
                    return True
                open_char = None
        i = end
    return open_char is not None


def fence_ranges(text: str) -> list[Range]:
    """Return ``(start, end)`` spans of every fenced region, markers included.

    A closer must repeat the opener's character at least as many times.
    An unterminated fence runs to the end of the text.
    """
    ranges: list[Range] = []
    open_char: str | None = None
    open_start = 0
    open_len = 0
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char not in FENCE_CHARS:
            i += 1
            continue
        end = _run_end(text, i)
        if end - i >= FENCE_MIN_RUN:
            if open_char is None:
                open_char = char
                open_start = i
                open_len = end - i
            elif char == open_char and end - i >= open_len:
                ranges.append((open_start, end))
                open_char = None
        i = end
    if open_char is not None:
        ranges.append((open_start, length))
    return ranges


def has_unclosed_fence(text: str) -> bool:
    """Check if a line-anchored code fence is left open at the end of ``text``.

    Follows CommonMark fence rules: an opener is a line starting (after at
    most three spaces) with three or more backticks or tildes, and a
    backtick opener's info string holds no backtick. Only a line made of the
    same character, at least as many of them and trailing blanks, closes
    it. Everything between, including the other fence character, is content.

    Example:
        >>> has_unclosed_fence("~~~md\\n```python\\nx\\n~~~\\n")
        False
        >>> has_unclosed_fence("````\\n```\\n")
        True
    """
    open_char: str | None = None
    open_len = 0
    for line in text.splitlines():
        body = line.lstrip(" ")
        if len(line) - len(body) > 3 or not body or body[0] not in FENCE_CHARS:
            continue
        char = body[0]
        run = _run_end(body, 0)
        if run < FENCE_MIN_RUN:
            continue
        rest = body[run:]
        if open_char is None:
            if char == "`" and "`" in rest:
                continue
            open_char = char
            open_len = run
        elif char == open_char and run >= open_len and not rest.strip():
            open_char = None
    return open_char is not None


def inline_code_ranges(text: str, fences: Sequence[Range] | None = None) -> list[Range]:
    """Return spans of closed inline code (one or two backtick delimiters).

    A span opens with a backtick run of length one or two and closes at the
    next run of exactly the same length. Runs inside fenced regions are
    ignored, as is an opening run escaped with a backslash. Unclosed spans
    are not reported: the healer has not closed them yet.
    """
    return _scan_inline_code(text, fences)[0]


def unclosed_inline_code(text: str, fences: Sequence[Range] | None = None) -> int:
    """Index of the backtick run opening an unclosed inline span, or -1.

    Example:
        >>> unclosed_inline_code("Use `items[0")
        4
        >>> unclosed_inline_code("Use `items[0]`")
        -1
    """
    return _scan_inline_code(text, fences)[1]


def _scan_inline_code(text: str, fences: Sequence[Range] | None) -> tuple[list[Range], int]:
    if "`" not in text:
        return [], -1
    if fences is None:
        fences = fence_ranges(text)

    ranges: list[Range] = []
    open_start = -1
    open_len = 0
    i = 0
    length = len(text)
    while i < length:
        if text[i] != "`":
            i += 1
            continue
        end = _run_end(text, i)
        run = end - i
        if run < FENCE_MIN_RUN and not in_ranges(fences, i):
            if open_start < 0:
                if not (i > 0 and text[i - 1] == "\\"):
                    open_start = i
                    open_len = run
            elif run == open_len:
                ranges.append((open_start, end))
                open_start = -1
        i = end
    return ranges, open_start


def code_ranges(text: str, *, include_unclosed: bool = False) -> list[Range]:
    """Return fenced regions and closed inline code spans, sorted and merged.

    An inline span may straddle a closed fence; overlapping regions are
    merged so ``in_ranges`` can bisect them. With ``include_unclosed`` an
    inline span that has not closed yet runs to the end of the text.
    """
    fences = fence_ranges(text)
    spans, open_start = _scan_inline_code(text, fences)
    if include_unclosed and open_start >= 0:
        spans.append((open_start, len(text)))
    if not spans:
        return fences
    merged: list[Range] = []
    for start, end in sorted(fences + spans):
        if merged and start < merged[-1][1]:
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
        else:
            merged.append((start, end))
    return merged


def in_ranges(ranges: Sequence[Range], position: int) -> bool:
    """Check if ``position`` lies in any of the sorted, non-overlapping ranges."""
    if not ranges:
        return False
    idx = bisect_right(ranges, (position, float("inf"))) - 1
    if idx < 0:
        return False
    start, end = ranges[idx]
    return start <= position < end


def strip_code(text: str) -> str:
    """Return ``text`` with fenced regions and closed inline code removed."""
    ranges = code_ranges(text)
    if not ranges:
        return text
    parts: list[str] = []
    last = 0
    for start, end in ranges:
        if start > last:
            parts.append(text[last:start])
        last = max(last, end)
    parts.append(text[last:])
    return "\n".join(parts)


def inside_math_block(text: str, position: int) -> bool:
    """Check if ``position`` is inside inline (``$``) or block (``$$``) math.

    Scans left to right up to ``position``. ``$$`` flips block math and
    forces inline math off; a single ``$`` only toggles inline math outside
    block math; ``\\$`` is escaped and ignored.

    Example:
        >>> inside_math_block("$$x^2$$", 3)
        True
        >>> inside_math_block("before $x$ after", 14)
        False
    """
    if not isinstance(text, str):
        return False

    in_inline = False
    in_block = False
    i = 0
    limit = min(position, len(text))
    while i < limit:
        char = text[i]
        if char == "\\" and i + 1 < len(text) and text[i + 1] == "$":
            i += 2
            continue
        if char == "$":
            if i + 1 < len(text) and text[i + 1] == "$":
                in_block = not in_block
                in_inline = False
                i += 2
                continue
            if not in_block:
                in_inline = not in_inline
        i += 1
    return in_inline or in_block


def math_ranges(text: str) -> list[Range]:
    """Return spans where ``inside_math_block`` holds, computed in one pass.

    The opening delimiter is included in its span; an unterminated span runs
    to the end of the text.
    """
    if "$" not in text:
        return []

    ranges: list[Range] = []
    in_inline = False
    in_block = False
    start = 0
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char == "\\" and i + 1 < length and text[i + 1] == "$":
            i += 2
            continue
        if char != "$":
            i += 1
            continue
        was_inside = in_inline or in_block
        if i + 1 < length and text[i + 1] == "$":
            in_block = not in_block
            in_inline = False
            step = 2
        else:
            if not in_block:
                in_inline = not in_inline
            step = 1
        now_inside = in_inline or in_block
        if now_inside and not was_inside:
            start = i
        elif was_inside and not now_inside:
            ranges.append((start, i + step))
        i += step
    if in_inline or in_block:
        ranges.append((start, length))
    return ranges


def inside_link_or_image_url(text: str, position: int) -> bool:
    """Check if ``position`` sits in the URL part of ``[text](url)``.

    Looks left on the current line for the nearest ``(``. The position is in
    a URL when that ``(`` directly follows ``]``, no ``)`` closes it before
    ``position``, and the ``](`` itself is not inside a code block. An
    unterminated URL counts up to the end of its line.

    Example:
        >>> inside_link_or_image_url("[text](http://example.com)", 10)
        True
        >>> inside_link_or_image_url("before [text](url) after", 2)
        False
    """
    if not isinstance(text, str) or position <= 0:
        return False

    for i in range(min(position, len(text)) - 1, -1, -1):
        char = text[i]
        if char == "\n" or char == ")":
            return False
        if char == "(":
            if i > 0 and text[i - 1] == "]":
                return not inside_code_block(text, i - 1)
            return False
    return False


def link_url_ranges(text: str) -> list[Range]:
    """Return spans where ``inside_link_or_image_url`` holds, in one pass.

    A span starts just past the ``(`` of a ``](`` outside fences and ends
    after the first ``(``, ``)`` or newline that follows it, or at the end
    of the text (plus one, so the end position itself is covered).
    """
    if "](" not in text:
        return []
    fences = fence_ranges(text)
    ranges: list[Range] = []
    length = len(text)
    i = text.find("](")
    while i != -1:
        paren = i + 1
        stop = paren + 1
        while stop < length and text[stop] not in "()\n":
            stop += 1
        if not in_ranges(fences, i):
            ranges.append((paren + 1, stop + 1))
        i = text.find("](", stop - 1)
    return ranges


def line_bounds(text: str, index: int) -> Range:
    """Return ``(start, end)`` of the line containing ``index`` (newline excluded)."""
    start = text.rfind("\n", 0, index) + 1
    end = text.find("\n", index)
    if end == -1:
        end = len(text)
    return start, end


def is_horizontal_rule(text: str, marker_index: int, marker: str) -> bool:
    """Check if the line holding ``marker_index`` is a thematic break.

    The line must hold at least three ``marker`` characters and nothing but
    spaces or tabs besides them (``---``, ``* * *``, ``___``).
    """
    start, end = line_bounds(text, marker_index)
    count = 0
    for i in range(start, end):
        char = text[i]
        if char == marker:
            count += 1
        elif char not in INLINE_WHITESPACE:
            return False
    return count >= 3


def thematic_break_lines(text: str, marker: str) -> frozenset[int]:
    """Return the start offsets of every line that is a ``marker`` rule.

    Same test as ``is_horizontal_rule``, decided once per line so a handler
    can look up any number of markers without rescanning.
    """
    starts: set[int] = set()
    start = 0
    length = len(text)
    while start <= length:
        end = text.find("\n", start)
        if end == -1:
            end = length
        count = 0
        for i in range(start, end):
            char = text[i]
            if char == marker:
                count += 1
            elif char not in INLINE_WHITESPACE:
                break
        else:
            if count >= 3:
                starts.add(start)
        start = end + 1
    return frozenset(starts)


__all__ = [
    "Range",
    "code_ranges",
    "fence_ranges",
    "find_matching_closing_bracket",
    "find_matching_opening_bracket",
    "has_unclosed_fence",
    "in_ranges",
    "inline_code_ranges",
    "inside_code_block",
    "inside_link_or_image_url",
    "inside_math_block",
    "is_horizontal_rule",
    "is_word_char",
    "line_bounds",
    "link_url_ranges",
    "math_ranges",
    "strip_code",
    "thematic_break_lines",
    "unclosed_inline_code",
]
