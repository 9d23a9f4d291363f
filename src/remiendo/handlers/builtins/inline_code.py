"""Inline code completion.

Backtick runs of one or two characters delimit inline code; runs of three
or more are fences. Only the former are counted here, and nothing is closed
while a fence is still open, since its contents are literal.

One exception: a single line that opens with a triple backtick and already
ends with two backticks (```` ```code`` ````) is an inline triple span being
typed, and gets its third backtick.

Thread Safety:
Stateless handler. Safe for concurrent use across threads.
"""

from __future__ import annotations

import re
from typing import ClassVar

from remiendo.charsets import FENCE_MIN_RUN
from remiendo.handlers.builtins.emphasis import has_content
from remiendo.scanners import fence_ranges, in_ranges, inside_code_block

_INLINE_TRIPLE = re.compile(r"^```[^`\n]*```?$")


class InlineCodeHandler:
    """Close an open inline code span."""

    name: ClassVar[str] = "inline_code"
    priority: ClassVar[int] = 50

    def handle(self, text: str) -> str:
        if "`" not in text:
            return text

        if "\n" not in text and _INLINE_TRIPLE.match(text):
            if text.endswith("``") and not text.endswith("```"):
                return text + "`"
            return text

        # An unterminated fence keeps everything after it literal
        if inside_code_block(text, len(text)):
            return text

        fences = fence_ranges(text)
        count = 0
        last_end = -1
        i = 0
        length = len(text)
        while i < length:
            if text[i] != "`":
                i += 1
                continue
            end = i
            while end < length and text[end] == "`":
                end += 1
            run = end - i
            escaped = i > 0 and text[i - 1] == "\\"
            if run < FENCE_MIN_RUN and not escaped and not in_ranges(fences, i):
                count += run
                last_end = end
            i = end

        if count % 2 == 0 or not has_content(text[last_end:]):
            return text
        return text + "`"
