"""Handler protocol for the healing pipeline.

A handler is a named, pure ``text -> text`` transform with a numeric
priority. Lower priorities run earlier. Built-ins occupy 0-80, so an embedder
can slot a handler before any built-in (negative priority), between two of
them, or after all of them (the default, ``DEFAULT_PRIORITY``).

Thread Safety:
Handlers must be stateless. The same handler instance may heal blocks from
several threads at once.

Example:
    >>> class JokeHandler:
    ...     name = "joke"
    ...     priority = 80
    ...
    ...     def handle(self, text):
    ...         if "<<<JOKE>>>" in text and not text.endswith("<<</JOKE>>>"):
    ...             return text + "<<</JOKE>>>"
    ...         return text

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

DEFAULT_PRIORITY = 100
"""Priority used for handlers that do not declare one (after all built-ins)."""

SETEXT_PRIORITY = 0
"""Priority of the setext guard, the first built-in to run."""


@runtime_checkable
class Handler(Protocol):
    """Protocol for healing handlers.

    Attributes:
        name: Unique handler name, used for logging and registration.
        priority: Sort key; lower runs earlier. Optional on user handlers.

    A handler must be idempotent on complete input: text without a dangling
    construct of its kind comes back unchanged.
    """

    name: str

    def handle(self, text: str) -> str:
        """Return ``text`` with this handler's construct closed or neutralized."""
        ...


def priority_of(handler: Handler) -> int:
    """Priority of ``handler``, falling back to DEFAULT_PRIORITY."""
    priority = getattr(handler, "priority", None)
    if priority is None:
        return DEFAULT_PRIORITY
    return priority


@dataclass(frozen=True, slots=True)
class FunctionHandler:
    """Handler wrapping a plain function."""

    name: str
    func: Callable[[str], str]
    priority: int = DEFAULT_PRIORITY

    def handle(self, text: str) -> str:
        return self.func(text)


def handler(
    name: str,
    func: Callable[[str], str],
    *,
    priority: int = DEFAULT_PRIORITY,
) -> FunctionHandler:
    """Wrap a ``str -> str`` function as a Handler.

    Example:
        >>> shout = handler("shout", str.upper, priority=5)
        >>> shout.handle("hi")
        'HI'
    """
    return FunctionHandler(name=name, func=func, priority=priority)


__all__ = [
    "DEFAULT_PRIORITY",
    "FunctionHandler",
    "Handler",
    "SETEXT_PRIORITY",
    "handler",
    "priority_of",
]
