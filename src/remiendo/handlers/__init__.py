"""Handler system for the healing pipeline.

Key components:
- Handler: Protocol for custom healing handlers
- handler(): Wrap a plain ``str -> str`` function as a Handler
- HandlerRegistry: Priority-ordered handler lookup
- builtin_handlers(): The default handlers enabled by a HealConfig

Thread Safety:
All components are designed for thread-safety:
- Built-in handlers are stateless
- Registry is immutable after creation
- User handlers must be stateless

Example:
    >>> from remiendo import HealConfig, heal
    >>> from remiendo.handlers import handler
    >>> joke = handler("joke", lambda t: t + "<<</JOKE>>>" if t.endswith("<<<JOKE>>>") else t)
    >>> heal("<<<JOKE>>>", HealConfig(handlers=(joke,)))
    '<<<JOKE>>><<</JOKE>>>'
"""

from __future__ import annotations

from remiendo.handlers.builtins import INCOMPLETE_LINK_URL, builtin_handlers
from remiendo.handlers.protocol import (
    DEFAULT_PRIORITY,
    SETEXT_PRIORITY,
    FunctionHandler,
    Handler,
    handler,
    priority_of,
)
from remiendo.handlers.registry import HandlerRegistry, HandlerRegistryBuilder

__all__ = [
    # Protocol
    "DEFAULT_PRIORITY",
    "FunctionHandler",
    "Handler",
    "SETEXT_PRIORITY",
    "handler",
    "priority_of",
    # Registry
    "HandlerRegistry",
    "HandlerRegistryBuilder",
    # Built-ins
    "INCOMPLETE_LINK_URL",
    "builtin_handlers",
]
