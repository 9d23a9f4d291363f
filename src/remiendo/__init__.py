"""
remiendo: Streaming Markdown stabilizer

Keeps token-by-token Markdown from a generative source renderable at every
intermediate state. Splits the growing buffer into memoizable blocks and
heals each block's unterminated inline constructs (bold, links, inline code,
math...) without disturbing syntax that is already complete.

Quick Start:
    >>> from remiendo import heal, parse_blocks
    >>> heal("Text with **bold")
    'Text with **bold**'
    >>> parse_blocks("# Title\\n\\nBody")
    ['# Title\\n\\n', 'Body']

    >>> # Or the whole tick at once
    >>> from remiendo import stabilize
    >>> snap = stabilize("```python\\nprint(1)")
    >>> snap.last_incomplete
    True

Custom Handlers:
    >>> from remiendo import HealConfig, handler, heal
    >>>
    >>> close_joke = handler(
    ...     "joke",
    ...     lambda t: t + "<<</JOKE>>>" if t.count("<<<JOKE>>>") > t.count("<<</JOKE>>>") else t,
    ...     priority=90,
    ... )
    >>> heal("<<<JOKE>>>Why", HealConfig(handlers=(close_joke,)))
    '<<<JOKE>>>Why<<</JOKE>>>'

Installation:
    pip install remiendo
"""

from remiendo.blocks import has_footnotes, parse_blocks
from remiendo.cache import BlockCache, LRUBlockCache, hash_config, hash_content
from remiendo.completeness import (
    has_incomplete_code_fence,
    incomplete_flags,
    is_block_incomplete,
)
from remiendo.config import (
    HealConfig,
    LinkMode,
    get_heal_config,
    heal_config_context,
    reset_heal_config,
    set_heal_config,
)
from remiendo.errors import HandlerError, RegistrationError, RemiendoError
from remiendo.handlers import (
    DEFAULT_PRIORITY,
    INCOMPLETE_LINK_URL,
    FunctionHandler,
    Handler,
    HandlerRegistry,
    HandlerRegistryBuilder,
    builtin_handlers,
    handler,
)
from remiendo.healer import Healer, heal
from remiendo.scanners import (
    find_matching_closing_bracket,
    find_matching_opening_bracket,
    inside_code_block,
    inside_link_or_image_url,
    inside_math_block,
    is_word_char,
)
from remiendo.stream import StreamSnapshot, stabilize

__version__ = "0.1.0"

__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "heal",
    "parse_blocks",
    "stabilize",
    "Healer",
    "StreamSnapshot",
    # Completeness
    "has_incomplete_code_fence",
    "incomplete_flags",
    "is_block_incomplete",
    "has_footnotes",
    # Block cache
    "BlockCache",
    "LRUBlockCache",
    "hash_config",
    "hash_content",
    # Configuration
    "HealConfig",
    "LinkMode",
    "get_heal_config",
    "heal_config_context",
    "reset_heal_config",
    "set_heal_config",
    # Handler extensibility
    "DEFAULT_PRIORITY",
    "INCOMPLETE_LINK_URL",
    "FunctionHandler",
    "Handler",
    "HandlerRegistry",
    "HandlerRegistryBuilder",
    "builtin_handlers",
    "handler",
    # Scanners
    "find_matching_closing_bracket",
    "find_matching_opening_bracket",
    "inside_code_block",
    "inside_link_or_image_url",
    "inside_math_block",
    "is_word_char",
    # Errors
    "HandlerError",
    "RegistrationError",
    "RemiendoError",
]
