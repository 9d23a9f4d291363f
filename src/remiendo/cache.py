"""Content-addressed block cache for remiendo.

Streaming re-submits the whole buffer on every tick, but only the last block
changes. Caching segmentation by buffer content and healing by
``(content_hash, config_hash)`` lets every settled block be reused.

The cache is owned by the caller and passed in explicitly; remiendo keeps
no module-level cache.

Thread Safety:
    LRUBlockCache guards its state with a lock and may be shared between
    threads. Cached values are immutable (str and tuple).

Example:
    >>> from remiendo import LRUBlockCache, stabilize
    >>> cache = LRUBlockCache(maxsize=512)
    >>> snap = stabilize("# Title\\n\\nSome **bold", cache=cache)
    >>> snap = stabilize("# Title\\n\\nSome **bold** text", cache=cache)  # title hits
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import TYPE_CHECKING, Protocol

from remiendo.utils.hashing import hash_str

if TYPE_CHECKING:
    from remiendo.config import HealConfig

SEGMENT_KEY = "blocks"
"""Config-hash slot used for segmentation results."""


class BlockCache(Protocol):
    """Protocol for content-addressed block caches.

    Cache key is (content_hash, config_hash). Cached values are immutable:
    a healed ``str``, or a ``tuple[str, ...]`` of blocks.
    """

    def get(self, content_hash: str, config_hash: str) -> object | None:
        """Return cached value if present, else None."""
        ...

    def put(self, content_hash: str, config_hash: str, value: object) -> None:
        """Store value in cache."""
        ...


class LRUBlockCache:
    """In-memory cache with least-recently-used eviction.

    Thread-safe: every access holds an internal lock.
    """

    __slots__ = ("_data", "_lock", "_maxsize")

    def __init__(self, maxsize: int = 256) -> None:
        if maxsize < 1:
            msg = f"maxsize must be at least 1, got {maxsize}"
            raise ValueError(msg)
        self._maxsize = maxsize
        self._data: OrderedDict[tuple[str, str], object] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def get(self, content_hash: str, config_hash: str) -> object | None:
        """Return cached value if present, else None."""
        key = (content_hash, config_hash)
        with self._lock:
            value = self._data.get(key)
            if value is not None:
                self._data.move_to_end(key)
            return value

    def put(self, content_hash: str, config_hash: str, value: object) -> None:
        """Store value, evicting the least recently used entry when full."""
        key = (content_hash, config_hash)
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            while len(self._data) > self._maxsize:
                self._data.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


def hash_content(source: str) -> str:
    """Compute SHA256 hash of source for cache key.

    Args:
        source: Markdown text (buffer or block)

    Returns:
        Hex digest of SHA256 hash
    """
    return hash_str(source)


def hash_config(config: HealConfig) -> str:
    """Compute hash of HealConfig for cache key.

    When user handlers are configured, returns empty string to disable
    caching (their output cannot be keyed by configuration alone).

    Args:
        config: HealConfig to hash

    Returns:
        Hex digest of config hash, or "" if cache should be bypassed
    """
    if config.handlers:
        return ""
    parts = (
        str(config.setext_headings),
        str(config.links),
        str(config.images),
        str(config.bold_italic),
        str(config.bold),
        str(config.italic),
        str(config.inline_code),
        str(config.strikethrough),
        str(config.comparison_operators),
        str(config.block_math),
        config.link_mode,
    )
    return hash_str("|".join(parts))


__all__ = [
    "BlockCache",
    "LRUBlockCache",
    "SEGMENT_KEY",
    "hash_config",
    "hash_content",
]
