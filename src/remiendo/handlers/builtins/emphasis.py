"""Emphasis completion: ``***``, ``**``, ``__``, ``*`` and ``_``.

Each handler counts its own marker outside code (fenced regions and closed
inline code spans). An odd count means the last marker is still open, and
the closer is appended as long as something meaningful follows that marker.
A lone ``**`` or ``_`` at the end of a chunk is left alone until content
arrives.

Longer markers run first. ``***`` is settled before ``**`` so a bold-italic
opener is never read as bold plus a stray asterisk, and ``**`` is settled
before ``*`` so bold markers are never double-counted as italics.

Single markers need more context than pairs:

- Markers are counted by run parity, so the ``**`` inside ``***`` never
  counts as an italic marker. Escaped markers, math and link URLs are
  skipped.
- A lone ``*`` is also skipped between two word characters (``2*3*4``),
  as a list bullet, or on a ``* * *`` rule line.
- A lone ``_`` is skipped when flanked by word characters on both sides
  (``snake_case_names``). Its closer goes before any trailing newlines.

Thread Safety:
Stateless handlers. Safe for concurrent use across threads.
"""

from __future__ import annotations

import re
from typing import ClassVar

from remiendo.charsets import EMPHASIS_FILLER, INLINE_WHITESPACE
from remiendo.scanners import (
    code_ranges,
    in_ranges,
    is_word_char,
    link_url_ranges,
    math_ranges,
    thematic_break_lines,
)

# A list item line holding nothing but its bullet before the marker
_LIST_ITEM_PREFIX = re.compile(r"^[ \t]*[-*+][ \t]+$")


def has_content(segment: str) -> bool:
    """True when ``segment`` holds more than whitespace and marker characters."""
    return any(char not in EMPHASIS_FILLER for char in segment)


class DelimiterPairHandler:
    """Close a two-character delimiter (``**``, ``__``, ``~~``).

    Occurrences are counted left to right without overlap, so ``***``
    contributes one pair. A half-typed closer such as ``**bold*`` is
    completed with a single character instead of a full pair.
    """

    name: ClassVar[str]
    priority: ClassVar[int]
    marker: ClassVar[str]

    def handle(self, text: str) -> str:
        marker = self.marker
        if marker not in text:
            return text

        code = code_ranges(text)
        count = 0
        last = -1
        i = text.find(marker)
        while i != -1:
            if not in_ranges(code, i):
                count += 1
                last = i
            i = text.find(marker, i + 2)

        if count % 2 == 0:
            return text

        content = text[last + 2 :]
        if not has_content(content):
            return text

        if self._in_bare_list_item(text, last, content):
            return text

        char = marker[0]
        if content.endswith(char) and char not in content[:-1]:
            return text + char
        return text + marker

    @staticmethod
    def _in_bare_list_item(text: str, marker_index: int, content: str) -> bool:
        """Marker opens a list item and its content already spans lines."""
        if "\n" not in content:
            return False
        line_start = text.rfind("\n", 0, marker_index) + 1
        return _LIST_ITEM_PREFIX.match(text[line_start:marker_index]) is not None


class BoldHandler(DelimiterPairHandler):
    """Close ``**bold``."""

    name: ClassVar[str] = "bold"
    priority: ClassVar[int] = 30
    marker: ClassVar[str] = "**"


class DoubleUnderscoreHandler(DelimiterPairHandler):
    """Close ``__emphasis``."""

    name: ClassVar[str] = "italic_underscore_double"
    priority: ClassVar[int] = 40
    marker: ClassVar[str] = "__"


class BoldItalicHandler:
    """Close ``***bold italic``.

    Asterisk runs of three or more count ``len // 3`` triples. Text made of
    nothing but four or more asterisks is a rule in progress, not emphasis.
    """

    name: ClassVar[str] = "bold_italic"
    priority: ClassVar[int] = 20

    def handle(self, text: str) -> str:
        if "***" not in text:
            return text
        if len(text) >= 4 and text.count("*") == len(text):
            return text

        code = code_ranges(text)
        count = 0
        last_end = -1
        i = 0
        length = len(text)
        while i < length:
            if text[i] != "*":
                i += 1
                continue
            end = i
            while end < length and text[end] == "*":
                end += 1
            if end - i >= 3 and not in_ranges(code, i):
                count += (end - i) // 3
                last_end = end
            i = end

        if count % 2 == 0:
            return text

        content = text[last_end:]
        if "*" in content or not has_content(content):
            return text
        return text + "***"


class _SingleMarkerHandler:
    """Close a one-character marker (``*`` or ``_``).

    Markers are counted by run: a run of odd length leaves one marker
    unpaired (``***`` is a ``**`` plus a ``*``), an even run leaves none.
    This keeps a closer appended by a pair handler, as in ``**a *b***``,
    from being read as a new opener.

    The pass is linear: the current line start is tracked while scanning
    and per-line verdicts are computed up front.
    """

    name: ClassVar[str]
    priority: ClassVar[int]
    char: ClassVar[str]

    def handle(self, text: str) -> str:
        char = self.char
        if char not in text:
            return text

        code = code_ranges(text)
        math = math_ranges(text)
        urls = link_url_ranges(text)
        rules = self._rule_lines(text)
        length = len(text)
        count = 0
        last_end = -1
        line_start = 0
        # Only indentation seen so far on the current line
        indent_only = True

        i = 0
        while i < length:
            current = text[i]
            if current != char:
                if current == "\n":
                    line_start = i + 1
                    indent_only = True
                elif current not in INLINE_WHITESPACE:
                    indent_only = False
                i += 1
                continue
            end = i + 1
            while end < length and text[end] == char:
                end += 1
            run = end - i
            if i > 0 and text[i - 1] == "\\":
                run -= 1
            if (
                run % 2
                and not in_ranges(code, i)
                and not in_ranges(math, i)
                and not in_ranges(urls, i)
                and line_start not in rules
                and not self._skip(text, i, end, run, indent_only)
            ):
                count += 1
                last_end = end
            indent_only = False
            i = end

        if count % 2 == 0 or not has_content(text[last_end:]):
            return text
        return self._close(text)

    def _rule_lines(self, text: str) -> frozenset[int]:
        return frozenset()

    def _skip(self, text: str, start: int, end: int, run: int, indent_only: bool) -> bool:
        # A lone marker between two word characters is literal
        return run == 1 and _word_internal(text, start, end)

    def _close(self, text: str) -> str:
        return text + self.char


class SingleAsteriskHandler(_SingleMarkerHandler):
    """Close ``*italic``."""

    name: ClassVar[str] = "italic_asterisk"
    priority: ClassVar[int] = 42
    char: ClassVar[str] = "*"

    def _rule_lines(self, text: str) -> frozenset[int]:
        return thematic_break_lines(text, "*")

    def _skip(self, text: str, start: int, end: int, run: int, indent_only: bool) -> bool:
        if run != 1:
            return False
        return _word_internal(text, start, end) or (indent_only and _is_list_bullet(text, end))


class SingleUnderscoreHandler(_SingleMarkerHandler):
    """Close ``_italic`` without touching ``snake_case`` identifiers."""

    name: ClassVar[str] = "italic_underscore"
    priority: ClassVar[int] = 44
    char: ClassVar[str] = "_"

    def _close(self, text: str) -> str:
        body = text.rstrip("\n")
        return f"{body}_{text[len(body):]}"


def _word_internal(text: str, start: int, end: int) -> bool:
    return (
        start > 0
        and end < len(text)
        and is_word_char(text[start - 1])
        and is_word_char(text[end])
    )


def _is_list_bullet(text: str, end: int) -> bool:
    """An indentation-led ``*`` followed by a blank."""
    return end < len(text) and text[end] in INLINE_WHITESPACE
