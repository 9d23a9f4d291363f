"""Block segmentation for streaming Markdown.

Splits a buffer into contiguous block substrings so a renderer can memoize
every block that stopped changing and re-render only the tail. The split is
lossless: ``"".join(parse_blocks(buffer)) == buffer``.

Block boundaries come from markdown-it-py: every top-level token's start
line opens a block. Blank lines between blocks stay with the preceding
block, and leading blank lines with the first.

Three constructs would be cut apart by a plain CommonMark tokenizer and are
merged back:

1. ``$$`` math. CommonMark has no math blocks, so a display equation with a
   blank line in it arrives as several paragraphs. A block opening with
   ``$$`` and holding an odd number of ``$$`` absorbs the blocks that follow
   until it balances; anything the merge pulled in after the closing ``$$``
   line is split back off as its own block.
2. Unterminated code fences. A block opening with a fence that never closes
   absorbs everything after it. Only a line of the opening character, at
   least as long as the opener, closes a fence.
3. HTML. An HTML block opening a tag it does not close absorbs the blocks
   that follow until the matching closing tag.

Documents with footnotes (``[^1]`` or ``[^note]:`` outside code) stay one
block so references and definitions land in the same tree.

Thread Safety:
parse_blocks() is pure. The shared MarkdownIt instance is only read after
module import, and every parse builds its own state.

Example:
    >>> parse_blocks("# Title\\n\\nParagraph")
    ['# Title\\n\\n', 'Paragraph']
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from markdown_it import MarkdownIt

from remiendo.cache import SEGMENT_KEY, hash_content
from remiendo.charsets import VOID_HTML_TAGS
from remiendo.scanners import code_ranges, has_unclosed_fence, in_ranges, strip_code
from remiendo.utils.logger import get_logger

if TYPE_CHECKING:
    from remiendo.cache import BlockCache

logger = get_logger(__name__)

# GFM tables and strikethrough on top of CommonMark
_md = MarkdownIt("commonmark").enable(["table", "strikethrough"])

# markdown-it normalizes all three line endings to "\n" before counting lines
_NEWLINE = re.compile(r"\r\n|\r|\n")

_FOOTNOTE = re.compile(r"\[\^[A-Za-z0-9_-]{1,200}\]")
_OPENING_TAG = re.compile(r"<([A-Za-z][A-Za-z0-9-]*)(?=[\s/>])")
_CLOSING_TAG = re.compile(r"</([A-Za-z][A-Za-z0-9-]*)\s*>")


def parse_blocks(markdown: str, *, cache: BlockCache | None = None) -> list[str]:
    """Split Markdown into ordered, contiguous block substrings.

    Args:
        markdown: The accumulated buffer. Non-str input is treated as an
            empty document.
        cache: Optional content-addressed cache keyed by the buffer text

    Returns:
        Blocks whose concatenation equals ``markdown``

    Example:
        >>> parse_blocks("```js\\ncode1\\n```\\n\\n```python\\ncode2")
        ['```js\\ncode1\\n```\\n\\n', '```python\\ncode2']
    """
    if not isinstance(markdown, str) or not markdown:
        return []

    if cache is not None:
        content_hash = hash_content(markdown)
        cached = cache.get(content_hash, SEGMENT_KEY)
        if cached is not None:
            return list(cached)

    blocks = _segment(markdown)

    if cache is not None:
        cache.put(content_hash, SEGMENT_KEY, tuple(blocks))
    return blocks


def has_footnotes(markdown: str) -> bool:
    """Check for a footnote reference or definition outside code."""
    if "[^" not in markdown:
        return False
    return _FOOTNOTE.search(strip_code(markdown)) is not None


def _segment(markdown: str) -> list[str]:
    if has_footnotes(markdown):
        logger.debug("Footnotes present, keeping document as one block")
        return [markdown]

    raw = _split_top_level(markdown)
    if len(raw) <= 1:
        return [block for block, _ in raw] or [markdown]
    return _merge(raw)


def _split_top_level(markdown: str) -> list[tuple[str, str]]:
    """Cut ``markdown`` at every top-level token start line.

    Returns ``(text, token_type)`` pairs.
    """
    line_offsets = [0]
    line_offsets.extend(match.end() for match in _NEWLINE.finditer(markdown))

    starts: list[tuple[int, str]] = []
    for token in _md.parse(markdown):
        if token.level != 0 or token.nesting < 0 or token.map is None:
            continue
        line = token.map[0]
        if line >= len(line_offsets) or (starts and line <= starts[-1][0]):
            continue
        starts.append((line, token.type))

    if not starts:
        return [(markdown, "")]

    pieces: list[tuple[str, str]] = []
    for index, (line, kind) in enumerate(starts):
        begin = 0 if index == 0 else line_offsets[line]
        if index + 1 < len(starts):
            end = line_offsets[starts[index + 1][0]]
        else:
            end = len(markdown)
        pieces.append((markdown[begin:end], kind))
    return pieces


def _merge(raw: list[tuple[str, str]]) -> list[str]:
    """Rejoin blocks that a CommonMark tokenizer separates mid-construct."""
    merged: list[str] = []
    html_stack: list[str] = []

    for block, kind in raw:
        if merged and html_stack:
            merged[-1] += block
            _close_html_tags(block, html_stack)
            continue

        if merged and _opens_unbalanced_math(merged[-1]):
            logger.debug("Merging block into open $$ math block")
            merged[-1] += block
            _split_after_math(merged)
            continue

        if merged and _opens_unterminated_fence(merged[-1]):
            logger.debug("Merging block into unterminated code fence")
            merged[-1] += block
            continue

        if kind == "html_block":
            tag = _unclosed_html_tag(block)
            if tag is not None:
                logger.debug("HTML block opens <%s> without closing it", tag)
                html_stack.append(tag)

        merged.append(block)

    return merged


def _math_delimiters(block: str) -> list[int]:
    """Offsets of ``$$`` delimiters outside code."""
    code = code_ranges(block)
    found: list[int] = []
    i = block.find("$$")
    while i != -1:
        if not in_ranges(code, i):
            found.append(i)
        i = block.find("$$", i + 2)
    return found


def _opens_unbalanced_math(block: str) -> bool:
    if not block.lstrip().startswith("$$"):
        return False
    return len(_math_delimiters(block)) % 2 == 1


def _split_after_math(merged: list[str]) -> None:
    """Split text absorbed past a merged math block's closing line into a new block."""
    block = merged[-1]
    if not block.lstrip().startswith("$$"):
        return
    delimiters = _math_delimiters(block)
    if len(delimiters) < 2 or len(delimiters) % 2:
        return

    closing = delimiters[1]
    line_end = block.find("\n", closing + 2)
    if line_end == -1:
        return
    head, tail = block[: line_end + 1], block[line_end + 1 :]
    if not tail.strip():
        return

    # Keep blank lines with the math block they follow
    stripped = tail.lstrip("\r\n")
    head += tail[: len(tail) - len(stripped)]
    merged[-1] = head
    merged.append(stripped)
    logger.debug("Split text after closing $$ into its own block")


def _opens_unterminated_fence(block: str) -> bool:
    return block.lstrip().startswith(("```", "~~~")) and has_unclosed_fence(block)


def _unclosed_html_tag(block: str) -> str | None:
    """Name of the tag an HTML block opens without closing, if any."""
    match = _OPENING_TAG.search(block)
    if match is None:
        return None
    tag = match.group(1).lower()
    if tag in VOID_HTML_TAGS:
        return None
    end = _opening_tag_end(block, match.end())
    if end != -1 and block[end - 1] == "/":
        return None
    rest = block[match.end() :] if end == -1 else block[end + 1 :]
    closing = re.compile(rf"</{re.escape(tag)}\s*>", re.IGNORECASE)
    if closing.search(rest):
        return None
    return tag


def _opening_tag_end(block: str, start: int) -> int:
    """Index of the ``>`` ending the tag whose attributes begin at ``start``.

    Quoted attribute values may hold ``>``. Returns -1 while the tag is
    still streaming in.
    """
    quote = ""
    for i in range(start, len(block)):
        char = block[i]
        if quote:
            if char == quote:
                quote = ""
        elif char in "\"'":
            quote = char
        elif char == ">":
            return i
    return -1


def _close_html_tags(block: str, html_stack: list[str]) -> None:
    for match in _CLOSING_TAG.finditer(block):
        if html_stack and match.group(1).lower() == html_stack[-1]:
            html_stack.pop()


__all__ = [
    "has_footnotes",
    "parse_blocks",
]
