"""Handler registry for the healing pipeline.

The registry holds handlers in execution order: ascending priority, with
registration order breaking ties (a stable sort). It is sorted once, when
built, and read on every heal.

Thread Safety:
HandlerRegistry is immutable after creation. Safe to share.
Use HandlerRegistryBuilder for mutable construction.

Example:
    >>> builder = HandlerRegistryBuilder()
    >>> builder.register(handler("shout", str.upper))
    >>> registry = builder.build()
    >>> [h.name for h in registry]
    ['shout']
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from remiendo.errors import RegistrationError
from remiendo.handlers.protocol import priority_of

if TYPE_CHECKING:
    from remiendo.handlers.protocol import Handler


class HandlerRegistry:
    """Immutable, priority-ordered collection of handlers."""

    __slots__ = ("_handlers", "_by_name")

    def __init__(self, handlers: tuple[Handler, ...]) -> None:
        """Initialize registry with handlers already in execution order.

        Use HandlerRegistryBuilder to create instances.
        """
        self._handlers = handlers
        self._by_name = {h.name: h for h in handlers}

    def get(self, name: str) -> Handler | None:
        """Get handler by name, or None if not registered."""
        return self._by_name.get(name)

    @property
    def names(self) -> tuple[str, ...]:
        """Handler names in execution order."""
        return tuple(h.name for h in self._handlers)

    @property
    def handlers(self) -> tuple[Handler, ...]:
        """Handlers in execution order."""
        return self._handlers

    def __iter__(self) -> Iterator[Handler]:
        return iter(self._handlers)

    def __contains__(self, name: str) -> bool:
        """Support 'name in registry' syntax."""
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._handlers)


class HandlerRegistryBuilder:
    """Mutable builder for HandlerRegistry.

    Example:
        >>> builder = HandlerRegistryBuilder()
        >>> builder.register(handler("late", str.strip, priority=200))
        >>> builder.register(handler("early", str.lower, priority=-1))
        >>> builder.build().names
        ('early', 'late')
    """

    __slots__ = ("_handlers", "_names")

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._handlers: list[Handler] = []
        self._names: set[str] = set()

    def register(self, handler: Handler) -> HandlerRegistryBuilder:
        """Register a handler.

        Args:
            handler: Object implementing the Handler protocol

        Returns:
            Self for chaining

        Raises:
            TypeError: If handler lacks a name or a callable handle()
            RegistrationError: If the priority is not a number or the name is
                already registered
        """
        name = getattr(handler, "name", None)
        if not isinstance(name, str) or not name:
            msg = f"Handler {type(handler).__name__} missing 'name' attribute"
            raise TypeError(msg)

        if not callable(getattr(handler, "handle", None)):
            msg = f"Handler {name!r} missing callable 'handle' method"
            raise TypeError(msg)

        priority = priority_of(handler)
        if isinstance(priority, bool) or not isinstance(priority, (int, float)):
            msg = f"Handler {name!r} priority must be a number, got {priority!r}"
            raise RegistrationError(msg)

        if name in self._names:
            msg = f"Handler '{name}' already registered"
            raise RegistrationError(msg)

        self._names.add(name)
        self._handlers.append(handler)
        return self

    def register_all(self, handlers: Iterable[Handler]) -> HandlerRegistryBuilder:
        """Register multiple handlers in order.

        Returns:
            Self for chaining
        """
        for handler in handlers:
            self.register(handler)
        return self

    def build(self) -> HandlerRegistry:
        """Build immutable registry, sorted by priority (stable)."""
        ordered = sorted(self._handlers, key=priority_of)
        return HandlerRegistry(tuple(ordered))

    def __len__(self) -> int:
        """Number of registered handlers."""
        return len(self._handlers)


__all__ = [
    "HandlerRegistry",
    "HandlerRegistryBuilder",
]
