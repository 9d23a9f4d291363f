"""Block math completion for ``$$``.

Thread Safety:
Stateless handler. Safe for concurrent use across threads.
"""

from __future__ import annotations

from typing import ClassVar

from remiendo.charsets import INLINE_WHITESPACE
from remiendo.scanners import code_ranges, in_ranges


class BlockMathHandler:
    """Close an open ``$$`` math block.

    When the opening ``$$`` sits alone on its line the closer goes on a line
    of its own too, so ``$$\\nx = 1`` becomes ``$$\\nx = 1\\n$$``.
    """

    name: ClassVar[str] = "block_math"
    priority: ClassVar[int] = 80

    def handle(self, text: str) -> str:
        if "$$" not in text:
            return text

        code = code_ranges(text)
        count = 0
        last = -1
        i = text.find("$$")
        while i != -1:
            if not in_ranges(code, i):
                count += 1
                last = i
            i = text.find("$$", i + 2)

        if count % 2 == 0:
            return text

        after = last + 2
        while after < len(text) and text[after] in INLINE_WHITESPACE:
            after += 1
        opens_block = after < len(text) and text[after] == "\n"
        if opens_block and not text.endswith("\n"):
            return text + "\n$$"
        return text + "$$"
