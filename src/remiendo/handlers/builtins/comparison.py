"""Comparison operator escaping in list items.

A list item such as ``- > 25: rich`` would otherwise render its ``>`` as a
blockquote marker. Escaping it as ``\\>`` keeps the comparison literal. A
``>`` at the very start of a line is a real blockquote and is never touched.

Thread Safety:
Stateless handler. Safe for concurrent use across threads.
"""

from __future__ import annotations

import re
from typing import ClassVar

from remiendo.scanners import inside_code_block

# list marker, then ">" followed by optional "=", blanks, "$" and a digit
_LIST_COMPARISON = re.compile(r"^([ \t]*(?:[-*+]|\d+[.)])[ \t]+)>(=?[ \t]*\$?\d)", re.MULTILINE)


class ComparisonOperatorHandler:
    """Escape ``>`` comparisons at the start of list item content."""

    name: ClassVar[str] = "comparison_operators"
    priority: ClassVar[int] = 70

    def handle(self, text: str) -> str:
        if ">" not in text:
            return text

        def escape(match: re.Match[str]) -> str:
            if inside_code_block(text, match.start()):
                return match.group(0)
            return f"{match.group(1)}\\>{match.group(2)}"

        return _LIST_COMPARISON.sub(escape, text)
