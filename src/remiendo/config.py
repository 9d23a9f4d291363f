"""ContextVar-based heal configuration for remiendo.

Provides context-local configuration using Python's ContextVars (PEP 567).
``heal()`` reads the active config when none is passed explicitly, so an
embedder can configure the healer once per thread or task.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit config
    from remiendo import HealConfig, heal
    heal("**bold", HealConfig(bold=False))

    # Or set it for the current context
    with heal_config_context(HealConfig(link_mode="text-only")):
        heal("See [the docs")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from remiendo.handlers.protocol import Handler

LinkMode = Literal["protocol", "text-only"]

LINK_MODES: frozenset[str] = frozenset({"protocol", "text-only"})


@dataclass(frozen=True, slots=True)
class HealConfig:
    """Immutable heal configuration.

    Every built-in handler can be switched off individually. Frozen dataclass
    ensures thread-safety (immutable after creation).

    Attributes:
        setext_headings: Guard trailing ``-``/``=`` lines against setext parsing
        links: Complete incomplete links
        images: Drop incomplete images
        bold_italic: Close ``***``
        bold: Close ``**``
        italic: Close ``__``, ``*`` and ``_``
        inline_code: Close inline code spans
        strikethrough: Close ``~~``
        comparison_operators: Escape ``>`` comparisons in list items
        block_math: Close ``$$`` math blocks
        link_mode: "protocol" closes links with the sentinel URL,
            "text-only" shows the bare link text
        handlers: User handlers merged into the pipeline by priority
        strict_handlers: Raise HandlerError when a user handler fails

    """

    setext_headings: bool = True
    links: bool = True
    images: bool = True
    bold_italic: bool = True
    bold: bool = True
    italic: bool = True
    inline_code: bool = True
    strikethrough: bool = True
    comparison_operators: bool = True
    block_math: bool = True
    link_mode: LinkMode = "protocol"
    handlers: tuple["Handler", ...] = ()
    strict_handlers: bool = False

    def __post_init__(self) -> None:
        if self.link_mode not in LINK_MODES:
            msg = f"link_mode must be one of {sorted(LINK_MODES)}, got {self.link_mode!r}"
            raise ValueError(msg)
        if not isinstance(self.handlers, tuple):
            object.__setattr__(self, "handlers", tuple(self.handlers))

    @classmethod
    def from_dict(cls, config_dict: dict) -> "HealConfig":
        """Create HealConfig from dictionary.

        Only includes keys that are valid HealConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = HealConfig.from_dict({"bold": False, "unknown_key": 1})
            >>> config.bold
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: HealConfig = HealConfig()

_heal_config: ContextVar[HealConfig] = ContextVar(
    "heal_config",
    default=_DEFAULT_CONFIG,
)


def get_heal_config() -> HealConfig:
    """Get current heal configuration (context-local)."""
    return _heal_config.get()


def set_heal_config(config: HealConfig) -> None:
    """Set heal configuration for the current context."""
    _heal_config.set(config)


def reset_heal_config() -> None:
    """Reset to the default configuration."""
    _heal_config.set(_DEFAULT_CONFIG)


@contextmanager
def heal_config_context(config: HealConfig) -> Iterator[HealConfig]:
    """Context manager for temporary config changes.

    Restores the previous config on exit, even if an exception is raised.

    Example:
        >>> with heal_config_context(HealConfig(bold=False)):
        ...     heal("**bold")
        '**bold'
    """
    token = _heal_config.set(config)
    try:
        yield config
    finally:
        _heal_config.reset(token)


__all__ = [
    "HealConfig",
    "LinkMode",
    "get_heal_config",
    "heal_config_context",
    "reset_heal_config",
    "set_heal_config",
]
