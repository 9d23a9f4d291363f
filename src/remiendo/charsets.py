"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from remiendo.charsets import FENCE_CHARS

    if char in FENCE_CHARS:  # O(1) lookup
        ...
"""

# Word characters that need no Unicode lookup
ASCII_WORD: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"
)

# Valid fence characters (``` and ~~~)
FENCE_CHARS: frozenset[str] = frozenset("`~")

# Minimum run length that makes a fence marker
FENCE_MIN_RUN: int = 3

# Characters that do not count as content after an opening marker
EMPHASIS_FILLER: frozenset[str] = frozenset(" \t\n\r\f\v_~*`")

# Unordered list markers
UNORDERED_LIST_MARKERS: frozenset[str] = frozenset("-*+")

# Horizontal whitespace inside a line
INLINE_WHITESPACE: frozenset[str] = frozenset(" \t")

# Setext underline characters
SETEXT_CHARS: frozenset[str] = frozenset("-=")

# HTML elements that never take a closing tag
VOID_HTML_TAGS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)
