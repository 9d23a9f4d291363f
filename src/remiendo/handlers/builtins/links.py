"""Incomplete link and image handling.

Streaming ``[text](https://exa`` renders as literal brackets until the
closing paren arrives. This handler settles the construct early:

- an incomplete **link** keeps its text and points at the sentinel URL
  ``streamdown:incomplete-link`` (or, in ``text-only`` mode, shows the bare
  text without brackets);
- an incomplete **image** is dropped entirely, since a half-known source
  cannot render anything useful.

Nested brackets in link text are matched by depth, so
``[outer [inner] text](partial`` resolves to the outer ``[``.

Brackets inside code are never links, and an inline code span that has not
closed yet counts as code up to the end of the text: in ``Use `items[0``
the ``[`` is an index, not a link.

When the sentinel is inserted the rest of the pipeline is skipped: the text
inside a not-yet-finished link is kept verbatim rather than reformatted.

Thread Safety:
Stateless handler. Safe for concurrent use across threads.
"""

from __future__ import annotations

from typing import ClassVar

from remiendo.config import LinkMode
from remiendo.scanners import (
    code_ranges,
    find_matching_opening_bracket,
    in_ranges,
)

INCOMPLETE_LINK_URL = "streamdown:incomplete-link"
"""Placeholder destination for a link whose URL has not arrived yet."""

INCOMPLETE_LINK_SUFFIX = f"]({INCOMPLETE_LINK_URL})"


class LinkImageHandler:
    """Complete incomplete links and drop incomplete images."""

    name: ClassVar[str] = "links"
    priority: ClassVar[int] = 10

    __slots__ = ("links", "images", "link_mode")

    def __init__(
        self,
        *,
        links: bool = True,
        images: bool = True,
        link_mode: LinkMode = "protocol",
    ) -> None:
        self.links = links
        self.images = images
        self.link_mode = link_mode

    def halts_pipeline(self, before: str, after: str) -> bool:
        """True when this pass inserted the sentinel URL."""
        return after != before and after.endswith(INCOMPLETE_LINK_SUFFIX)

    def handle(self, text: str) -> str:
        if "[" not in text:
            return text

        code = code_ranges(text, include_unclosed=True)

        paren_index = text.rfind("](")
        if paren_index != -1 and not in_ranges(code, paren_index):
            result = self._complete_url(text, paren_index, code)
            if result is not None:
                return result

        # Walk backwards pairing each "[" with a "]" to its right
        pending = 0
        for i in range(len(text) - 1, -1, -1):
            char = text[i]
            if char == "]":
                pending += 1
            elif char == "[":
                if pending:
                    pending -= 1
                elif not in_ranges(code, i):
                    result = self._complete_text(text, i)
                    if result is not None:
                        return result

        return text

    def _complete_url(self, text: str, paren_index: int, code: list[tuple[int, int]]) -> str | None:
        """Handle ``[text](partial-url`` where the URL has no closing paren."""
        if ")" in text[paren_index + 2 :]:
            return None

        open_index = find_matching_opening_bracket(text, paren_index)
        if open_index == -1 or in_ranges(code, open_index):
            return None

        is_image = open_index > 0 and text[open_index - 1] == "!"
        start = open_index - 1 if is_image else open_index
        before = text[:start]
        label = text[open_index + 1 : paren_index]

        if is_image:
            return before if self.images else None
        if not self.links:
            return None
        if self.link_mode == "text-only":
            return before + label
        return f"{before}[{label}{INCOMPLETE_LINK_SUFFIX}"

    def _complete_text(self, text: str, open_index: int) -> str | None:
        """Handle ``[partial text`` whose ``]`` has not arrived."""
        is_image = open_index > 0 and text[open_index - 1] == "!"
        start = open_index - 1 if is_image else open_index

        if is_image:
            return text[:start] if self.images else None
        if not self.links:
            return None
        if self.link_mode == "text-only":
            return text[:start] + text[open_index + 1 :]
        return text + INCOMPLETE_LINK_SUFFIX
