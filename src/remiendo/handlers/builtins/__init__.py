"""Built-in healing handlers.

Provides the handlers that run by default, in execution order:
- Setext guard: breaks a partial ``-``/``=`` underline (priority 0)
- Links and images: sentinel-completes links, drops images (10)
- Emphasis: ``***`` (20), ``**`` (30), ``__`` (40), ``*`` (42), ``_`` (44)
- Inline code: closes single and double backtick spans (50)
- Strikethrough: closes ``~~`` (60)
- Comparison operators: escapes ``>`` in list items (70)
- Block math: closes ``$$`` (80)

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from remiendo.handlers.builtins.comparison import ComparisonOperatorHandler
from remiendo.handlers.builtins.emphasis import (
    BoldHandler,
    BoldItalicHandler,
    DelimiterPairHandler,
    DoubleUnderscoreHandler,
    SingleAsteriskHandler,
    SingleUnderscoreHandler,
)
from remiendo.handlers.builtins.inline_code import InlineCodeHandler
from remiendo.handlers.builtins.links import (
    INCOMPLETE_LINK_SUFFIX,
    INCOMPLETE_LINK_URL,
    LinkImageHandler,
)
from remiendo.handlers.builtins.block_math import BlockMathHandler
from remiendo.handlers.builtins.setext import SETEXT_BREAKER, SetextHeadingHandler
from remiendo.handlers.builtins.strikethrough import StrikethroughHandler

if TYPE_CHECKING:
    from remiendo.config import HealConfig
    from remiendo.handlers.protocol import Handler


def builtin_handlers(config: HealConfig) -> list[Handler]:
    """Instantiate the built-in handlers enabled by ``config``.

    The list is in registration order; HandlerRegistryBuilder sorts it.
    """
    handlers: list[Handler] = []
    if config.setext_headings:
        handlers.append(SetextHeadingHandler())
    if config.links or config.images:
        handlers.append(
            LinkImageHandler(
                links=config.links,
                images=config.images,
                link_mode=config.link_mode,
            )
        )
    if config.bold_italic:
        handlers.append(BoldItalicHandler())
    if config.bold:
        handlers.append(BoldHandler())
    if config.italic:
        handlers.append(DoubleUnderscoreHandler())
        handlers.append(SingleAsteriskHandler())
        handlers.append(SingleUnderscoreHandler())
    if config.inline_code:
        handlers.append(InlineCodeHandler())
    if config.strikethrough:
        handlers.append(StrikethroughHandler())
    if config.comparison_operators:
        handlers.append(ComparisonOperatorHandler())
    if config.block_math:
        handlers.append(BlockMathHandler())
    return handlers


__all__ = [
    # Setext
    "SETEXT_BREAKER",
    "SetextHeadingHandler",
    # Links
    "INCOMPLETE_LINK_SUFFIX",
    "INCOMPLETE_LINK_URL",
    "LinkImageHandler",
    # Emphasis
    "BoldHandler",
    "BoldItalicHandler",
    "DelimiterPairHandler",
    "DoubleUnderscoreHandler",
    "SingleAsteriskHandler",
    "SingleUnderscoreHandler",
    # Code
    "InlineCodeHandler",
    # Strikethrough
    "StrikethroughHandler",
    # Comparison
    "ComparisonOperatorHandler",
    # Math
    "BlockMathHandler",
    # Factory
    "builtin_handlers",
]
