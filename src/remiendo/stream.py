"""One-call stabilization of a streaming buffer snapshot.

Runs the whole data flow for one tick: segment the buffer, heal every block,
and classify the last block. Pass the same cache on every tick so settled
blocks are segmented and healed once.

Thread Safety:
stabilize() keeps no state between calls. StreamSnapshot is frozen.

Example:
    >>> snap = stabilize("# Plan\\n\\n1. Write **tests")
    >>> snap.healed
    ('# Plan', '1. Write **tests**')
    >>> snap.last_incomplete
    False
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from remiendo.blocks import parse_blocks
from remiendo.cache import hash_config, hash_content
from remiendo.completeness import is_block_incomplete
from remiendo.config import get_heal_config
from remiendo.healer import Healer

if TYPE_CHECKING:
    from remiendo.cache import BlockCache
    from remiendo.config import HealConfig


@dataclass(frozen=True, slots=True)
class StreamSnapshot:
    """Stabilized view of one buffer snapshot.

    Attributes:
        blocks: Raw blocks; their concatenation is the buffer
        healed: Healed text of each (stripped) block, index-aligned with blocks
        incomplete: Whether the last block holds an unterminated code fence
            while streaming
    """

    blocks: tuple[str, ...]
    healed: tuple[str, ...]
    incomplete: bool = False

    @property
    def last_incomplete(self) -> bool:
        return self.incomplete

    def __len__(self) -> int:
        return len(self.blocks)


def stabilize(
    buffer: str,
    *,
    streaming: bool = True,
    config: HealConfig | None = None,
    cache: BlockCache | None = None,
) -> StreamSnapshot:
    """Segment, heal and classify a buffer snapshot.

    Args:
        buffer: Full text accumulated so far
        streaming: Whether more text may still arrive
        config: Heal configuration (uses the context-local config if None)
        cache: Optional cache shared across ticks

    Returns:
        StreamSnapshot for this tick
    """
    if config is None:
        config = get_heal_config()

    blocks = parse_blocks(buffer, cache=cache)
    healer = Healer(config)
    config_hash = hash_config(config) if cache is not None else ""

    healed: list[str] = []
    for block in blocks:
        text = block.strip()
        if config_hash:
            content_hash = hash_content(text)
            cached = cache.get(content_hash, config_hash)
            if cached is None:
                cached = healer.heal(text)
                cache.put(content_hash, config_hash, cached)
            healed.append(cached)
        else:
            healed.append(healer.heal(text))

    incomplete = is_block_incomplete(blocks, len(blocks) - 1, streaming=streaming)
    return StreamSnapshot(
        blocks=tuple(blocks),
        healed=tuple(healed),
        incomplete=incomplete,
    )


__all__ = [
    "StreamSnapshot",
    "stabilize",
]
