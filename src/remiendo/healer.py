"""Incomplete-token healer.

Runs one block of streaming Markdown through the handler pipeline so that
every construct left open by the stream (``**bold``, ``[link](http``,
`` `code``, ``$$``...) is closed or neutralized before the block is parsed.

Pipeline:
1. Non-str or empty input comes back unchanged.
2. One trailing space is trimmed, unless the text ends with two or more
   spaces (a Markdown hard line break).
3. Handlers run in ascending priority; ties keep registration order, with
   built-ins registered ahead of user handlers.
4. A handler exposing ``halts_pipeline(before, after)`` can stop the run
   early. The link handler does so once it inserts the sentinel URL.

Built-in handlers are total functions. A user handler that raises or
returns a non-string is logged and skipped, its input carried forward,
unless the config sets ``strict_handlers``.

Thread Safety:
Healer is immutable after construction and its handlers are stateless.
A single instance may heal blocks from any number of threads.

Example:
    >>> heal("Text with **bold")
    'Text with **bold**'
    >>> heal("See [the docs](https://exa")
    'See [the docs](streamdown:incomplete-link)'
"""

from __future__ import annotations

from remiendo.config import _DEFAULT_CONFIG, HealConfig, get_heal_config
from remiendo.errors import HandlerError
from remiendo.handlers.builtins import builtin_handlers
from remiendo.handlers.protocol import Handler
from remiendo.handlers.registry import HandlerRegistry, HandlerRegistryBuilder
from remiendo.utils.logger import get_logger

logger = get_logger(__name__)


class Healer:
    """Reusable healing pipeline for one HealConfig.

    The registry is sorted once here and reused for every call.

    Usage:
        >>> healer = Healer(HealConfig(link_mode="text-only"))
        >>> healer.heal("Read [the guide")
        'Read the guide'

    """

    __slots__ = ("_config", "_registry", "_user_handlers")

    def __init__(self, config: HealConfig | None = None) -> None:
        if config is None:
            config = get_heal_config()
        self._config = config

        builder = HandlerRegistryBuilder()
        builder.register_all(builtin_handlers(config))
        builder.register_all(config.handlers)
        self._registry = builder.build()
        self._user_handlers = frozenset(id(h) for h in config.handlers)

    @property
    def config(self) -> HealConfig:
        return self._config

    @property
    def registry(self) -> HandlerRegistry:
        """Handlers in execution order."""
        return self._registry

    def heal(self, text: str) -> str:
        """Close or neutralize every incomplete construct in ``text``.

        Args:
            text: One block of (possibly partial) Markdown

        Returns:
            Healed text. Input that is not a non-empty str is returned as is.

        Raises:
            HandlerError: A user handler failed and ``strict_handlers`` is set
        """
        if not isinstance(text, str) or not text:
            return text

        result = _trim_trailing_space(text)
        for handler in self._registry:
            before = result
            if id(handler) in self._user_handlers:
                result = self._run_user_handler(handler, result)
            else:
                result = handler.handle(result)

            halts = getattr(handler, "halts_pipeline", None)
            if halts is not None and halts(before, result):
                logger.debug("Pipeline stopped after handler %r", handler.name)
                break
        return result

    def _run_user_handler(self, handler: Handler, text: str) -> str:
        try:
            result = handler.handle(text)
        except Exception as e:
            if self._config.strict_handlers:
                raise HandlerError(handler.name, str(e) or type(e).__name__) from e
            logger.warning("Handler %r failed, keeping its input", handler.name, exc_info=True)
            return text

        if not isinstance(result, str):
            message = f"returned {type(result).__name__}, expected str"
            if self._config.strict_handlers:
                raise HandlerError(handler.name, message)
            logger.warning("Handler %r %s, keeping its input", handler.name, message)
            return text
        return result


def _trim_trailing_space(text: str) -> str:
    """Drop one trailing space, keeping double-space hard breaks."""
    if text.endswith(" ") and not text.endswith("  "):
        return text[:-1]
    return text


# Shared by every heal() call under the default config
_DEFAULT_HEALER = Healer(_DEFAULT_CONFIG)


def heal(text: str, config: HealConfig | None = None) -> str:
    """Heal one block of streaming Markdown.

    Args:
        text: Block text, usually one element of ``parse_blocks``
        config: Heal configuration (uses the context-local config if None)

    Returns:
        Text with incomplete constructs closed

    Example:
        >>> heal("**xxx*")
        '**xxx**'
        >>> heal("- > 25: rich")
        '- \\\\> 25: rich'
    """
    if config is None:
        config = get_heal_config()
    if config is _DEFAULT_CONFIG:
        return _DEFAULT_HEALER.heal(text)
    return Healer(config).heal(text)


__all__ = [
    "Healer",
    "heal",
]
