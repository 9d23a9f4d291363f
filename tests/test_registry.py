"""Tests for handler registration."""

import pytest

from remiendo import (
    DEFAULT_PRIORITY,
    FunctionHandler,
    Handler,
    HandlerRegistryBuilder,
    HealConfig,
    RegistrationError,
    builtin_handlers,
    handler,
)
from remiendo.handlers import priority_of


class TestHandlerHelper:
    """Wrapping plain functions."""

    def test_wraps_function(self) -> None:
        shout = handler("shout", str.upper, priority=5)
        assert isinstance(shout, FunctionHandler)
        assert shout.handle("hi") == "HI"
        assert shout.priority == 5

    def test_satisfies_protocol(self) -> None:
        assert isinstance(handler("x", str.strip), Handler)

    def test_priority_fallback(self) -> None:
        class Bare:
            name = "bare"

            def handle(self, text: str) -> str:
                return text

        assert priority_of(Bare()) == DEFAULT_PRIORITY


class TestBuilder:
    """Builder validation and ordering."""

    def test_sorted_by_priority(self) -> None:
        builder = HandlerRegistryBuilder()
        builder.register(handler("late", str.strip, priority=200))
        builder.register(handler("early", str.lower, priority=-1))
        assert builder.build().names == ("early", "late")

    def test_ties_keep_registration_order(self) -> None:
        builder = HandlerRegistryBuilder()
        builder.register_all(handler(name, str.strip, priority=1) for name in "abc")
        assert builder.build().names == ("a", "b", "c")

    def test_chaining(self) -> None:
        registry = (
            HandlerRegistryBuilder()
            .register(handler("a", str.strip))
            .register(handler("b", str.strip))
            .build()
        )
        assert len(registry) == 2

    def test_duplicate_name(self) -> None:
        builder = HandlerRegistryBuilder().register(handler("a", str.strip))
        with pytest.raises(RegistrationError, match="already registered"):
            builder.register(handler("a", str.lower))

    def test_missing_name(self) -> None:
        class Nameless:
            def handle(self, text: str) -> str:
                return text

        with pytest.raises(TypeError, match="name"):
            HandlerRegistryBuilder().register(Nameless())  # type: ignore[arg-type]

    def test_handle_not_callable(self) -> None:
        class NotCallable:
            name = "bad"
            handle = "nope"

        with pytest.raises(TypeError, match="handle"):
            HandlerRegistryBuilder().register(NotCallable())  # type: ignore[arg-type]

    def test_bool_priority_rejected(self) -> None:
        with pytest.raises(RegistrationError, match="priority"):
            HandlerRegistryBuilder().register(handler("a", str.strip, priority=True))

    def test_string_priority_rejected(self) -> None:
        with pytest.raises(RegistrationError, match="must be a number"):
            HandlerRegistryBuilder().register(handler("a", str.strip, priority="high"))  # type: ignore[arg-type]

    def test_priority_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            HandlerRegistryBuilder().register(handler("a", str.strip, priority=[1]))  # type: ignore[arg-type]

    def test_len(self) -> None:
        builder = HandlerRegistryBuilder()
        assert len(builder) == 0
        builder.register(handler("a", str.strip))
        assert len(builder) == 1


class TestRegistry:
    """Immutable lookups."""

    def test_lookup(self) -> None:
        upper = handler("upper", str.upper)
        registry = HandlerRegistryBuilder().register(upper).build()
        assert registry.get("upper") is upper
        assert registry.get("missing") is None
        assert "upper" in registry
        assert "missing" not in registry
        assert list(registry) == [upper]
        assert registry.handlers == (upper,)


class TestBuiltinHandlers:
    """Built-ins follow the config toggles."""

    def test_all_enabled(self) -> None:
        assert len(builtin_handlers(HealConfig())) == 11

    def test_links_and_images_share_one_handler(self) -> None:
        names = [h.name for h in builtin_handlers(HealConfig(links=False))]
        assert "links" in names
        names = [h.name for h in builtin_handlers(HealConfig(links=False, images=False))]
        assert "links" not in names

    def test_unique_names(self) -> None:
        names = [h.name for h in builtin_handlers(HealConfig())]
        assert len(names) == len(set(names))
