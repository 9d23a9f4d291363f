"""Setext heading guard.

Setext headings underline a line with ``-`` or ``=``. While a response
streams, a list item that has only produced its ``-`` marker (or an ``=`` that
is about to grow into ``==>``) sits directly under a paragraph line and a
block parser would turn that paragraph into a heading for one frame.

The guard appends a zero-width space to a trailing ``-``/``--``/``=``/``==``
line that follows content, which breaks the underline without being visible.
``---`` and ``===`` are left alone: those are real underlines or breaks.
Lines inside open ``$$`` math are left alone too.

Thread Safety:
Stateless handler. Safe for concurrent use across threads.
"""

from __future__ import annotations

from typing import ClassVar

from remiendo.charsets import SETEXT_CHARS
from remiendo.handlers.protocol import SETEXT_PRIORITY
from remiendo.scanners import inside_math_block

SETEXT_BREAKER = "\u200b"
"""Invisible character appended to break a partial setext underline."""


def _is_partial_underline(line: str) -> bool:
    """One or two ``-`` (or ``=``) with optional leading whitespace only."""
    stripped = line.lstrip()
    if not 1 <= len(stripped) <= 2:
        return False
    if stripped[0] not in SETEXT_CHARS or stripped != stripped[0] * len(stripped):
        return False
    # Trailing whitespace already breaks the underline pattern
    return not line[-1].isspace()


class SetextHeadingHandler:
    """Break a trailing one- or two-character setext underline."""

    name: ClassVar[str] = "setext_headings"
    priority: ClassVar[int] = SETEXT_PRIORITY

    def handle(self, text: str) -> str:
        last_newline = text.rfind("\n")
        if last_newline == -1:
            return text

        last_line = text[last_newline + 1 :]
        if not last_line or not _is_partial_underline(last_line):
            return text

        previous_start = text.rfind("\n", 0, last_newline) + 1
        previous_line = text[previous_start:last_newline]
        if not previous_line.strip():
            return text

        # An equation line such as "=" inside open $$ math is not an underline
        if "$" in text and inside_math_block(text, last_newline + 1):
            return text

        return text + SETEXT_BREAKER
